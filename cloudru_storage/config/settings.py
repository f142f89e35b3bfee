from functools import lru_cache
from typing import Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVICE_URL = "https://s3.cloud.ru"
DEFAULT_REGION = "ru-central-1"


# =======================
# S3 Storage Settings
# =======================
class S3Settings(BaseModel):
    """Cloud.ru Object Storage credentials and bucket."""
    tenant_id: str = ""
    access_key: str = ""
    secret_key: str = ""
    bucket_name: str = ""
    service_url: str = DEFAULT_SERVICE_URL


# =======================
# Logging Settings
# =======================
class LoggingSettings(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    # Файл для журнала ошибок хранилища (опционально)
    file: Optional[str] = None
    # Включает логирование ошибок в ObjectStorageService
    errors: bool = True


# =======================
# Main Settings
# =======================
class Settings(BaseSettings):
    """Application settings."""
    # Application metadata
    title: str = "Cloud.ru Object Storage Helper"
    version: str = "1.0.0"
    description: str = "Folder and file operations over Cloud.ru Object Storage"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        env_file_encoding="utf-8",
        env_nested_delimiter="_",
        env_nested_max_split=1,
        case_sensitive=False,
        extra="ignore",
    )

    s3: S3Settings = S3Settings()
    logging: LoggingSettings = LoggingSettings()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = [
    "DEFAULT_REGION",
    "DEFAULT_SERVICE_URL",
    "LoggingSettings",
    "S3Settings",
    "Settings",
    "get_settings",
]
