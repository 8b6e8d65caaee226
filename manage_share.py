"""
Share-link maintenance from the command line.

    python manage_share.py share <model_id> [--import-allowed]
    python manage_share.py unshare <model_id>
    python manage_share.py allow-import <model_id> --off
    python manage_share.py show <shared_id>
"""
import argparse
import asyncio
import sys
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import get_settings
from app.repositories.model_repository import ModelRepository, MongoModelRepository
from app.services.model_service import ModelNotFoundError, ModelService, UnauthorizedError


def _model_id(raw: str):
    return ObjectId(raw) if ObjectId.is_valid(raw) else raw


async def main(args, repository: Optional[ModelRepository] = None) -> int:
    client = None
    if repository is None:
        settings = get_settings()
        client = AsyncIOMotorClient(settings.mongo_uri, serverSelectionTimeoutMS=settings.mongo_timeout_ms)
        repository = MongoModelRepository(client[settings.mongo_db_name][settings.models_collection])
    service = ModelService(repository)
    try:
        if args.command == "show":
            view = await service.find_shared_model(args.target)
            print(view.model_dump_json(by_alias=True, indent=2))
            return 0

        model_id = _model_id(args.target)
        if args.command == "share":
            options = await service.share_model(model_id, import_allowed=args.import_allowed)
        elif args.command == "unshare":
            options = await service.unshare_model(model_id)
        else:
            options = await service.set_import_allowed(model_id, not args.off)

        state = "active" if options.active else "inactive"
        print(f"{state}  import={'yes' if options.import_allowed else 'no'}  {service.share_link(options)}")
        return 0
    except UnauthorizedError:
        print(f"Share {args.target} is not active or does not exist", file=sys.stderr)
        return 1
    except ModelNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    finally:
        if client is not None:
            client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage public share links of diagram models")
    sub = parser.add_subparsers(dest="command", required=True)

    share = sub.add_parser("share", help="enable (or re-enable) the share link of a model")
    share.add_argument("target", metavar="model_id")
    share.add_argument("--import-allowed", action="store_true", help="let viewers import a copy")

    unshare = sub.add_parser("unshare", help="deactivate the share link, keeping its id")
    unshare.add_argument("target", metavar="model_id")

    allow = sub.add_parser("allow-import", help="toggle import on an existing share")
    allow.add_argument("target", metavar="model_id")
    allow.add_argument("--off", action="store_true")

    show = sub.add_parser("show", help="print what a share-link viewer sees")
    show.add_argument("target", metavar="shared_id")
    return parser


if __name__ == "__main__":
    sys.exit(asyncio.run(main(build_parser().parse_args())))
