"""
app/repositories/model_repository.py — storage seam for diagram models.
The service layer only ever talks to a ModelRepository. MongoDB is the only
serving backend; the in-memory store exists for tests.
"""
import copy
from typing import Any, Dict, Optional, Protocol

from app.config import get_settings
from app.database import DatabaseUnavailableError, get_db

_MISSING = object()


class ModelRepository(Protocol):
    async def find_one(self, filter: Dict[str, Any]) -> Optional[dict]:
        ...

    async def update_one(self, filter: Dict[str, Any], values: Dict[str, Any]) -> bool:
        """Apply ``values`` as a ``$set`` to the first match. True if one matched."""
        ...


class MongoModelRepository:
    def __init__(self, collection):
        self._collection = collection

    async def find_one(self, filter: Dict[str, Any]) -> Optional[dict]:
        return await self._collection.find_one(filter)

    async def update_one(self, filter: Dict[str, Any], values: Dict[str, Any]) -> bool:
        res = await self._collection.update_one(filter, {"$set": values})
        return res.matched_count > 0


# ── In-memory store (tests) ──────────────────────────────────────────────────────────────────────────────────────────────────────────────

def _lookup(doc: dict, path: str) -> Any:
    current: Any = doc
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _assign(doc: dict, path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    current = doc
    for part in parents:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[leaf] = value


def _matches(doc: dict, filter: Dict[str, Any]) -> bool:
    return all(_lookup(doc, key) == expected for key, expected in filter.items())


class InMemoryModelRepository:
    """Dict-backed stand-in supporting equality filters on (dotted) field paths."""

    def __init__(self, documents: Optional[list] = None):
        self._docs: list = [copy.deepcopy(d) for d in (documents or [])]

    async def find_one(self, filter: Dict[str, Any]) -> Optional[dict]:
        for doc in self._docs:
            if _matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    async def update_one(self, filter: Dict[str, Any], values: Dict[str, Any]) -> bool:
        for doc in self._docs:
            if _matches(doc, filter):
                for path, value in values.items():
                    _assign(doc, path, copy.deepcopy(value))
                return True
        return False


def get_model_repository() -> ModelRepository:
    db = get_db()
    if db is not None:
        return MongoModelRepository(db[get_settings().models_collection])
    raise DatabaseUnavailableError()
