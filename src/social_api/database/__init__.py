"""
Blob-backed document database for the Social API.

Collections are key prefixes in the object store; every record is one JSON
object. Queries are list-then-fetch scans and joins happen in Python.
"""

from .blob_store import BlobDocumentStore
from .keys import build_key, collection_prefix, sanitize_segment

__all__ = [
    'BlobDocumentStore',
    'build_key', 'collection_prefix', 'sanitize_segment',
]
