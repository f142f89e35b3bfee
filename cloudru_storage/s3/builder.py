"""Fluent builder for ObjectStorageService."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from cloudru_storage.config.logger import LoggerOptions, StdErrorLogger, get_logger
from cloudru_storage.config.settings import DEFAULT_SERVICE_URL, S3Settings
from cloudru_storage.exceptions import ConfigurationError
from cloudru_storage.s3.client import create_s3_client
from cloudru_storage.storage.service import ObjectStorageService

logger = get_logger(__name__)

REQUIRED_FIELDS = ("tenant_id", "access_key", "secret_key", "bucket_name")


class S3ClientBuilder(BaseModel):
    """
    Строитель ObjectStorageService.

    Позволяет пошагово задать параметры подключения к объектному хранилищу
    Cloud.ru. Строитель неизменяем: каждый вызов ``with_*`` возвращает новый
    экземпляр, поэтому частично настроенный строитель можно переиспользовать.

    Пример:
        service = (
            S3ClientBuilder()
            .with_tenant_id("tenant")
            .with_access_key("key")
            .with_secret_key("secret")
            .with_bucket_name("bucket")
            .build()
        )
    """

    model_config = ConfigDict(frozen=True)

    tenant_id: str = ""
    access_key: str = ""
    secret_key: str = ""
    bucket_name: str = ""
    service_url: str = DEFAULT_SERVICE_URL
    logger_options: Optional[LoggerOptions] = None

    @classmethod
    def from_settings(
        cls, s3: S3Settings, logger_options: Optional[LoggerOptions] = None
    ) -> "S3ClientBuilder":
        return cls(
            tenant_id=s3.tenant_id,
            access_key=s3.access_key,
            secret_key=s3.secret_key,
            bucket_name=s3.bucket_name,
            service_url=s3.service_url,
            logger_options=logger_options,
        )

    def with_tenant_id(self, tenant_id: str) -> "S3ClientBuilder":
        return self.model_copy(update={"tenant_id": tenant_id})

    def with_access_key(self, access_key: str) -> "S3ClientBuilder":
        return self.model_copy(update={"access_key": access_key})

    def with_secret_key(self, secret_key: str) -> "S3ClientBuilder":
        return self.model_copy(update={"secret_key": secret_key})

    def with_bucket_name(self, bucket_name: str) -> "S3ClientBuilder":
        return self.model_copy(update={"bucket_name": bucket_name})

    def with_service_url(self, service_url: str) -> "S3ClientBuilder":
        return self.model_copy(update={"service_url": service_url})

    def use_logger(self, options: Optional[LoggerOptions] = None) -> "S3ClientBuilder":
        """Включает логирование ошибок с заданными настройками."""
        return self.model_copy(update={"logger_options": options or LoggerOptions()})

    def validate_required(self) -> None:
        for field in REQUIRED_FIELDS:
            if not getattr(self, field):
                raise ConfigurationError(field)

    def build(self) -> ObjectStorageService:
        """
        Создаёт настроенный ObjectStorageService.

        Raises:
            ConfigurationError: Если не задан обязательный параметр
        """
        self.validate_required()

        client = create_s3_client(
            access_key_id=f"{self.tenant_id}:{self.access_key}",
            secret_access_key=self.secret_key,
            service_url=self.service_url,
        )
        error_logger = StdErrorLogger(self.logger_options) if self.logger_options is not None else None
        logger.info(
            f"Building ObjectStorageService for bucket {self.bucket_name}, "
            f"error logging: {error_logger is not None}"
        )
        return ObjectStorageService(client, self.bucket_name, error_logger)
