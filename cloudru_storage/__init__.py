"""Convenience facade over Cloud.ru Object Storage (S3-compatible)."""

from cloudru_storage.config.logger import LoggerOptions, NullErrorLogger, StdErrorLogger
from cloudru_storage.exceptions import (
    CloudRuStorageError,
    ConfigurationError,
    StorageError,
    is_not_found,
)
from cloudru_storage.storage.service import ObjectStorageService
from cloudru_storage.s3.builder import S3ClientBuilder
from cloudru_storage.s3.client import create_s3_client

__version__ = "1.0.0"

__all__ = [
    "CloudRuStorageError",
    "ConfigurationError",
    "LoggerOptions",
    "NullErrorLogger",
    "ObjectStorageService",
    "S3ClientBuilder",
    "StdErrorLogger",
    "StorageError",
    "create_s3_client",
    "is_not_found",
]
