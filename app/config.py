from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "modelshare"
    models_collection: str = "models"
    mongo_tls: bool = False
    mongo_timeout_ms: int = 5000
    # App
    environment: str = "development"
    app_url: str = "http://localhost:5173"   # Frontend URL for share links
    log_level: str = "INFO"
    # Rate limiting on the public share endpoint
    share_rate_limit_per_minute: int = 60
    # Peers whose X-Forwarded-For header is honoured (JSON list in .env)
    trusted_proxies: List[str] = []


@lru_cache()
def get_settings() -> Settings:
    return Settings()
