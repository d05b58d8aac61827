"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

from typing import List, Optional

import boto3
from botocore.exceptions import ClientError

try:
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import GetObjectOutputTypeDef, ObjectTypeDef
except ImportError:
    ...


def object_exists_in_s3(
    bucket_name: str,
    object_key: str,
    s3_client: Optional["S3Client"] = None,
) -> bool:
    """
    Check if an object exists in the S3 bucket using head_object.

    :param bucket_name: Name of the S3 bucket.
    :param object_key: Key of the object to check.
    :param s3_client: Optional S3 client to use. If not provided, a new client will be created.

    :return: True if the object exists, False otherwise.
    """
    s3_client = s3_client or boto3.client("s3")
    try:
        s3_client.head_object(Bucket=bucket_name, Key=object_key)
        return True
    except ClientError as err:
        error_code = err.response.get("Error", {}).get("Code")
        if error_code in ("404", "NoSuchKey", "NotFound"):
            return False
        raise


def fetch_s3_object(
    bucket_name: str,
    object_key: str,
    s3_client: Optional["S3Client"] = None,
) -> "GetObjectOutputTypeDef":
    """
    Fetch an object from an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.

    :return: The get_object response; the content is in its `Body` stream.
    """
    s3_client = s3_client or boto3.client("s3")
    return s3_client.get_object(Bucket=bucket_name, Key=object_key)


def fetch_s3_object_bytes(
    bucket_name: str,
    object_key: str,
    s3_client: Optional["S3Client"] = None,
) -> bytes:
    """Fetch an object and read its whole body."""
    response = fetch_s3_object(bucket_name, object_key, s3_client=s3_client)
    return response["Body"].read()


def fetch_s3_objects_metadata(
    bucket_name: str,
    prefix: Optional[str] = None,
    s3_client: Optional["S3Client"] = None,
) -> List["ObjectTypeDef"]:
    """
    Fetch metadata of every object under a prefix, following pagination.

    :param bucket_name: The name of the S3 bucket.
    :param prefix: The prefix to filter objects by.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.

    :return: List of object metadata dicts (`Key`, `Size`, `LastModified`, ...).
    """
    s3_client = s3_client or boto3.client("s3")
    paginator = s3_client.get_paginator("list_objects_v2")
    objects: List["ObjectTypeDef"] = []
    for page in paginator.paginate(Bucket=bucket_name, Prefix=prefix or ""):
        objects.extend(page.get("Contents", []))
    return objects


def generate_object_url(
    bucket_name: str,
    object_key: str,
    public_base_url: Optional[str] = None,
    expires_in: int = 3600,
    s3_client: Optional["S3Client"] = None,
) -> str:
    """
    Build a URL clients can use to download an object.

    With a public base URL (CDN, public bucket) the key is appended to it;
    otherwise a presigned GET URL is generated.
    """
    if public_base_url:
        return f"{public_base_url}/{object_key}"
    s3_client = s3_client or boto3.client("s3")
    return s3_client.generate_presigned_url(
        ClientMethod="get_object",
        Params={"Bucket": bucket_name, "Key": object_key},
        ExpiresIn=expires_in,
    )
