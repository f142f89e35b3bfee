"""S3 client construction for Cloud.ru Object Storage."""

from .client import create_s3_client
from .builder import S3ClientBuilder

__all__ = ["create_s3_client", "S3ClientBuilder"]
