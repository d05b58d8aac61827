"""S3 client construction from application settings."""
import logging
from typing import Optional

import boto3

from social_api.settings import Settings, get_settings

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)


def get_s3_client(settings: Optional[Settings] = None) -> "S3Client":
    """
    Create an S3 client configured from settings.

    Credentials and endpoint are only passed when set, so the default boto3
    credential chain (env vars, profile, IAM role) applies otherwise.
    """
    settings = settings or get_settings()

    client_kwargs = {"region_name": settings.aws_region}
    if settings.aws_access_key_id:
        client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url

    try:
        client = boto3.client("s3", **client_kwargs)
    except Exception as e:
        logger.error(f"Error creating s3 client: {str(e)}")
        raise

    logger.debug(f"Created s3 client (region={settings.aws_region}, endpoint={settings.aws_endpoint_url})")
    return client
