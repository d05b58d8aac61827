import boto3
import pytest
from botocore.exceptions import ClientError

from social_api.s3.delete_objects import delete_s3_object
from social_api.s3.read_objects import (
    fetch_s3_object_bytes,
    fetch_s3_objects_metadata,
    generate_object_url,
    object_exists_in_s3,
)
from social_api.s3.write_objects import upload_s3_object
from tests.consts import TEST_BUCKET_NAME


def test_upload_fetch_delete(mocked_aws):
    s3_client = boto3.client("s3")
    upload_s3_object(TEST_BUCKET_NAME, "media/a.txt", b"hello", content_type="text/plain", s3_client=s3_client)

    assert object_exists_in_s3(TEST_BUCKET_NAME, "media/a.txt", s3_client=s3_client)
    assert fetch_s3_object_bytes(TEST_BUCKET_NAME, "media/a.txt", s3_client=s3_client) == b"hello"
    head = s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key="media/a.txt")
    assert head["ContentType"] == "text/plain"

    delete_s3_object(TEST_BUCKET_NAME, "media/a.txt", s3_client=s3_client)
    assert not object_exists_in_s3(TEST_BUCKET_NAME, "media/a.txt", s3_client=s3_client)


def test_default_content_type(mocked_aws):
    s3_client = boto3.client("s3")
    upload_s3_object(TEST_BUCKET_NAME, "blob", b"\x00", s3_client=s3_client)

    head = s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key="blob")
    assert head["ContentType"] == "application/octet-stream"


def test_metadata_listing_follows_pagination(mocked_aws):
    s3_client = boto3.client("s3")
    for i in range(1005):
        s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key=f"users/{i:04d}.json", Body=b"{}")
    s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key="media/a.jpg", Body=b"x")

    objects = fetch_s3_objects_metadata(TEST_BUCKET_NAME, prefix="users/", s3_client=s3_client)
    assert len(objects) == 1005
    assert all(obj["Key"].startswith("users/") for obj in objects)


def test_fetch_missing_object_raises(mocked_aws):
    with pytest.raises(ClientError):
        fetch_s3_object_bytes(TEST_BUCKET_NAME, "missing.json", s3_client=boto3.client("s3"))


def test_object_url_uses_public_base_url():
    url = generate_object_url(TEST_BUCKET_NAME, "media/a.jpg", public_base_url="https://cdn.example.com")
    assert url == "https://cdn.example.com/media/a.jpg"


def test_object_url_is_presigned_without_base_url(mocked_aws):
    url = generate_object_url(TEST_BUCKET_NAME, "media/a.jpg", expires_in=60, s3_client=boto3.client("s3"))
    assert TEST_BUCKET_NAME in url
    assert "media/a.jpg" in url
    assert "Expires=" in url or "X-Amz-Expires=60" in url
