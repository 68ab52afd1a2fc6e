# barcode_engine/config.py
import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "barcode-engine")
    API_VERSION: str = os.getenv("APP_VERSION", "0.1.0")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_DIRECTORY: str = os.getenv("LOG_DIRECTORY", "logs")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ROOT_PATH: str = os.getenv("ROOT_PATH", "")

    BATCH_MAX_WORKERS: int = int(os.getenv("BATCH_MAX_WORKERS", "1"))
    BATCH_MAX_ITEMS: int = int(os.getenv("BATCH_MAX_ITEMS", "1000"))
    MAX_UPLOAD_FILES: int = int(os.getenv("MAX_UPLOAD_FILES", "5"))

    RENDER_IMAGES: bool = os.getenv("RENDER_IMAGES", "false").lower() in ("1", "true", "yes")
    RENDER_DPI: int = int(os.getenv("RENDER_DPI", "96"))

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()
