# backend/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

# ============================================================
# 🌍 DETECT ENVIRONMENT AND LOAD THE MATCHING .env
# ============================================================
ENV = os.getenv("ENV", "development")

env_file = ".env.production" if ENV == "production" else ".env.development"
dotenv_path = Path(__file__).resolve().parent / env_file
load_dotenv(dotenv_path)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


# ============================================================
# ⚙️ GENERAL SETTINGS
# ============================================================
class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "AudioHub")
    VERSION: str = os.getenv("VERSION", "1.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # 🔹 Metadata store (MongoDB)
    MONGO_URI: str = os.getenv("MONGO_URI", "")
    MONGO_USER: str = os.getenv("MONGO_USER") or None
    MONGO_PASSWORD: str = os.getenv("MONGO_PASSWORD") or None
    MONGO_HOST: str = os.getenv("MONGO_HOST", "localhost")
    MONGO_PORT: str = os.getenv("MONGO_PORT", "27017")
    MONGO_DB: str = os.getenv("MONGO_DB", "audiohub")
    MONGO_TIMEOUT_MS: int = _int_env("MONGO_TIMEOUT_MS", 5000)

    # 🔹 Object store (S3 compatible bucket)
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "audiohub")
    STORAGE_REGION: str = os.getenv("STORAGE_REGION", "us-east-1")
    STORAGE_ENDPOINT_URL: str = os.getenv("STORAGE_ENDPOINT_URL") or None
    STORAGE_ACCESS_KEY_ID: str = os.getenv("STORAGE_ACCESS_KEY_ID") or None
    STORAGE_SECRET_ACCESS_KEY: str = os.getenv("STORAGE_SECRET_ACCESS_KEY") or None
    STORAGE_PUBLIC_BASE_URL: str = os.getenv("STORAGE_PUBLIC_BASE_URL") or None
    AUDIO_KEY_PREFIX: str = os.getenv("AUDIO_KEY_PREFIX", "audio")

    # 🔹 Identity verification: "header" (placeholder) or "jwt"
    AUTH_MODE: str = os.getenv("AUTH_MODE", "header").lower()
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-audiohub-development-secret")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # 🔹 Pagination
    DEFAULT_PAGE: int = _int_env("DEFAULT_PAGE", 1)
    DEFAULT_PAGE_LIMIT: int = _int_env("DEFAULT_PAGE_LIMIT", 10)

    # 🔹 Others
    ALLOWED_ORIGINS: list = os.getenv("ALLOWED_ORIGINS", "*").split(",")
    DEBUG: bool = ENV == "development"
    ENV: str = ENV

settings = Settings()
