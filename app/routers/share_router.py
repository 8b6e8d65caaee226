"""
app/routers/share_router.py
Public share endpoint. No authentication required.
Serves the public projection of a diagram model via its share id.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from app.models import SharedModelView
from app.services.model_service import ModelService, UnauthorizedError, get_model_service

router = APIRouter(prefix="/share", tags=["Share"])


@router.get("/models/{shared_id}", response_model=SharedModelView)
async def get_shared_model(shared_id: str, service: ModelService = Depends(get_model_service)):
    """
    Public endpoint — no auth.
    401 for unknown, unshared or deactivated links, indistinguishably.
    """
    try:
        return await service.find_shared_model(shared_id)
    except UnauthorizedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.code)
