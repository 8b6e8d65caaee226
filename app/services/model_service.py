"""
app/services/model_service.py — shared-model resolution and share management.

Anonymous viewers reach a model only through its share identifier
(``shareOptions._id``). ``find_shared_model`` validates the share descriptor and
returns the public projection; every failure to validate collapses into the
same ``UnauthorizedError`` so callers cannot tell a missing model from a
revoked link. Repository errors are never caught here.
"""
import logging
import uuid
from typing import Optional

from app.config import get_settings
from app.models import ShareOptions, SharedModelView
from app.repositories.model_repository import ModelRepository, get_model_repository

logger = logging.getLogger(__name__)

UNAUTHORIZED = "unauthorized"


class UnauthorizedError(Exception):
    """The share identifier does not resolve to an active share."""

    code = UNAUTHORIZED

    def __init__(self):
        super().__init__(UNAUTHORIZED)


class ModelNotFoundError(Exception):
    def __init__(self, model_id):
        self.model_id = model_id
        super().__init__(f"Model not found: {model_id}")


def _share_filter(shared_id: str) -> dict:
    return {"shareOptions._id": shared_id}


def build_shared_model_view(record: dict) -> SharedModelView:
    share = record["shareOptions"]
    return SharedModelView(
        id=share["_id"],
        model=record["model"],
        type=record["type"],
        name=record["name"],
        importAllowed=bool(share.get("importAllowed")),
    )


class ModelService:
    def __init__(self, repository: ModelRepository):
        self.repository = repository

    async def find_shared_model(self, shared_id: str) -> SharedModelView:
        record = await self.repository.find_one(_share_filter(shared_id))
        if record is None:
            logger.debug("share %s rejected: no model", shared_id)
            raise UnauthorizedError()

        share = record.get("shareOptions")
        if share is None:
            logger.debug("share %s rejected: model has no share options", shared_id)
            raise UnauthorizedError()
        if share.get("active") is not True:
            logger.debug("share %s rejected: share inactive", shared_id)
            raise UnauthorizedError()

        return build_shared_model_view(record)

    # ── Owner-side share management ───────────────────────────────────────────

    async def _get_model(self, model_id) -> dict:
        record = await self.repository.find_one({"_id": model_id})
        if record is None:
            raise ModelNotFoundError(model_id)
        return record

    async def _existing_share(self, model_id) -> dict:
        record = await self._get_model(model_id)
        share = record.get("shareOptions")
        if share is None:
            raise ModelNotFoundError(model_id)
        return share

    async def _save_share(self, model_id, share: dict) -> ShareOptions:
        if not await self.repository.update_one({"_id": model_id}, {"shareOptions": share}):
            # deleted between read and write
            raise ModelNotFoundError(model_id)
        return ShareOptions(**share)

    async def share_model(self, model_id, import_allowed: bool = False) -> ShareOptions:
        """Enable the share link, keeping a previously issued share id."""
        record = await self._get_model(model_id)
        previous = record.get("shareOptions") or {}
        share = {
            "_id": previous.get("_id") or str(uuid.uuid4()),
            "active": True,
            "importAllowed": bool(import_allowed),
        }
        options = await self._save_share(model_id, share)
        logger.info("model %s shared as %s (import allowed: %s)", model_id, options.id, options.import_allowed)
        return options

    async def unshare_model(self, model_id) -> ShareOptions:
        share = dict(await self._existing_share(model_id))
        share["active"] = False
        options = await self._save_share(model_id, share)
        logger.info("model %s share %s deactivated", model_id, options.id)
        return options

    async def set_import_allowed(self, model_id, allowed: bool) -> ShareOptions:
        share = dict(await self._existing_share(model_id))
        share["importAllowed"] = bool(allowed)
        return await self._save_share(model_id, share)

    @staticmethod
    def share_link(options: ShareOptions) -> str:
        return f"{get_settings().app_url.rstrip('/')}/share/{options.id}"


def get_model_service() -> ModelService:
    return ModelService(get_model_repository())


async def find_shared_model(shared_id: str, repository: Optional[ModelRepository] = None) -> SharedModelView:
    service = ModelService(repository) if repository is not None else get_model_service()
    return await service.find_shared_model(shared_id)
