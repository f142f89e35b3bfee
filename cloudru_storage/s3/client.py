"""boto3 client factory for Cloud.ru Object Storage."""

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from cloudru_storage.config.logger import get_logger
from cloudru_storage.config.settings import DEFAULT_REGION, DEFAULT_SERVICE_URL

logger = get_logger(__name__)


def create_s3_client(
    access_key_id: str,
    secret_access_key: str,
    service_url: str = DEFAULT_SERVICE_URL,
    region: str = DEFAULT_REGION,
) -> BaseClient:
    """
    Create an S3 client configured for Cloud.ru.

    SigV4 (HMAC-SHA256) signing and path-style addressing are always on.
    No request is sent until the first operation.

    Args:
        access_key_id: Access key in the form "<tenant_id>:<key_id>"
        secret_access_key: Secret key
        service_url: Object Storage endpoint
        region: Signing region

    Returns:
        boto3 S3 client
    """
    if ":" not in access_key_id:
        logger.warning("Cloud.ru access key likely missing tenant_id prefix '<tenant_id>:<key_id>'")

    client = boto3.client(
        "s3",
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        region_name=region,
        endpoint_url=service_url,
        config=Config(
            signature_version="s3v4",
            s3={
                "addressing_style": "path",
            },
        ),
    )
    logger.info(f"S3 client initialized for endpoint: {service_url}")
    return client
