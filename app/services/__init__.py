from .model_service import (
    UNAUTHORIZED,
    UnauthorizedError,
    ModelNotFoundError,
    ModelService,
    find_shared_model,
)
