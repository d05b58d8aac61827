"""Functions for writing objects to an S3 bucket--the "C" and "U" in CRUD."""

from typing import Optional

import boto3

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: bytes,
    content_type: Optional[str] = None,
    s3_client: Optional["S3Client"] = None,
) -> None:
    """
    Write one object: a JSON document, a media upload or a voice note.

    Writing to an existing key replaces the object, which is how document
    updates are persisted.

    :param bucket_name: The bucket holding both documents and media.
    :param object_key: Full key, e.g. ``users/<id>.json`` or ``media/<name>-<millis>.jpg``.
    :param file_content: Raw bytes of the object.
    :param content_type: MIME type; ``application/octet-stream`` when unknown.
    :param s3_client: Client to use. A default boto3 client is created when omitted.
    """
    s3_client = s3_client or boto3.client("s3")
    s3_client.put_object(
        Bucket=bucket_name,
        Key=object_key,
        Body=file_content,
        ContentType=content_type or DEFAULT_CONTENT_TYPE,
    )
