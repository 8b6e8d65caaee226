from pydantic import BaseModel, Field, field_validator
from typing import Any


def _stringify_id(value: Any) -> Any:
    # Share ids written by other clients may be BSON ObjectIds
    if value is None or isinstance(value, str):
        return value
    return str(value)


# ─── Stored documents ──────────────────────────────────────────────────────────

class ShareOptions(BaseModel):
    """Embedded share descriptor of a model document (``shareOptions``)."""
    id: str = Field(..., alias="_id", description="Public share identifier")
    active: bool = False
    import_allowed: bool = Field(False, alias="importAllowed")

    model_config = {"populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        return _stringify_id(value)


# ─── Public projection ─────────────────────────────────────────────────────────

class SharedModelView(BaseModel):
    """What an anonymous share-link viewer gets to see."""
    id: str = Field(..., description="Share identifier, not the model identifier")
    model: Any = Field(..., description="Diagram payload, e.g. nodes/edges")
    type: str
    name: str
    import_allowed: bool = Field(False, alias="importAllowed")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "share-id-1",
                "model": {"nodes": [], "edges": []},
                "type": "conceptual",
                "name": "Test Model",
                "importAllowed": True,
            }
        },
    }

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value):
        return _stringify_id(value)
