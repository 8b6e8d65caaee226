from .model_repository import (
    ModelRepository,
    MongoModelRepository,
    InMemoryModelRepository,
    get_model_repository,
)

__all__ = [
    "ModelRepository",
    "MongoModelRepository",
    "InMemoryModelRepository",
    "get_model_repository",
]
