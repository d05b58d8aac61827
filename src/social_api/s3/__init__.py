"""
S3 object helpers for the Social API.

Thin wrappers around the boto3 S3 client for the create, read, update and
delete of raw objects. The document layer in `social_api.database` is built on
top of these.
"""
