from pydantic import BaseModel
import os
from dotenv import load_dotenv

load_dotenv()


def _csv(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseModel):
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME: str = os.getenv("MONGO_DB_NAME", "griftline")
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_PASSWORD: str | None = os.getenv("REDIS_PASSWORD")
    CACHE_TTL: int = int(os.getenv("CACHE_TTL", "3600"))  # 1 hr
    CORS_ORIGINS: list[str] = _csv(os.getenv("CORS_ORIGINS"), ["*"])

    # pagination
    ENTRIES_PAGE_SIZE: int = int(os.getenv("ENTRIES_PAGE_SIZE", "20"))
    ALL_ENTRIES_PAGE_SIZE: int = int(os.getenv("ALL_ENTRIES_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))
    LEADERBOARD_PAGE_SIZE: int = int(os.getenv("LEADERBOARD_PAGE_SIZE", "10"))

    # images
    CDN_BASE_URL: str | None = os.getenv("CDN_BASE_URL")
    S3_BUCKET: str | None = os.getenv("S3_BUCKET")
    AWS_REGION: str = os.getenv("AWS_REGION", "us-east-2")
    AWS_ACCESS_KEY_ID: str | None = os.getenv("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY: str | None = os.getenv("AWS_SECRET_ACCESS_KEY")

    # hosted search index
    SEARCH_APP_ID: str | None = os.getenv("SEARCH_APP_ID")
    SEARCH_API_KEY: str | None = os.getenv("SEARCH_API_KEY")
    SEARCH_INDEX: str = os.getenv("SEARCH_INDEX", "entries")

    # API client
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    API_TIMEOUT: float = float(os.getenv("API_TIMEOUT", "10"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")


settings = Settings()
