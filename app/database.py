import logging

import certifi
from motor.motor_asyncio import AsyncIOMotorClient
from .config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

client: AsyncIOMotorClient = None
db = None


class DatabaseUnavailableError(Exception):
    """Raised when a request needs MongoDB but no connection is established."""

    def __init__(self, detail: str = "Database unavailable"):
        self.detail = detail
        super().__init__(detail)


async def connect_db():
    global client, db

    kwargs = {"serverSelectionTimeoutMS": settings.mongo_timeout_ms}
    if settings.mongo_tls:
        # certifi bundle reliably verifies Atlas certificates
        kwargs.update(tls=True, tlsCAFile=certifi.where())

    client = AsyncIOMotorClient(settings.mongo_uri, **kwargs)
    try:
        await client.admin.command("ping")
    except Exception:
        client.close()
        client = None
        raise
    db = client[settings.mongo_db_name]
    logger.info("Connected to MongoDB: %s", settings.mongo_db_name)


async def close_db():
    global client, db
    if client:
        client.close()
        logger.info("MongoDB connection closed")
    client = None
    db = None


def get_db():
    return db
