"""
Storage key layout for the blob document store.

Every record lives at ``<collection>/<id>.json``. Keys are restricted to
``[A-Za-z0-9._-]`` plus the ``/`` separator so they are safe as flat storage
paths. Media-scoped collections (comments, likes) embed a sanitised media id in
the collection name, so two raw media ids that sanitise to the same string
share a collection.
"""

import random
import re
import string
from datetime import datetime

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_ID_ALPHABET = string.ascii_lowercase + string.digits

PUBLIC_MESSAGES = "public-messages"
PRIVATE_MESSAGES = "private-messages"
USERS = "users"
COMMENTS = "comments"
LIKES = "likes"
MEDIA = "media"
CHAT_MEDIA = "chat-media"
VOICE = "voice"


def sanitize_segment(part: str) -> str:
    """Map unsafe characters to ``_`` and trim leading/trailing underscores."""
    return _UNSAFE_CHARS.sub("_", part).strip("_")


def sanitize_media_id(media_id: str) -> str:
    """Map unsafe characters to ``_`` without trimming."""
    return _UNSAFE_CHARS.sub("_", media_id)


def build_key(*parts: str) -> str:
    """Join sanitised, non-blank segments with ``/``."""
    clean_parts = [sanitize_segment(part) for part in parts if part and part.strip()]
    return "/".join(part for part in clean_parts if part)


def collection_prefix(kind: str, media_id: str) -> str:
    """
    Collection name for records scoped to one media item, e.g. ``likes-<id>``.

    The same name is used for writes and listings.
    """
    return sanitize_segment(f"{kind}-{sanitize_media_id(media_id)}")


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def generate_id(prefix: str, moment: datetime) -> str:
    """``<prefix>_<millis>_<9 base36 chars>``: collision resistant, not collision proof."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{prefix}_{epoch_millis(moment)}_{suffix}"


def generate_like_id(user_id: str, moment: datetime) -> str:
    return f"like_{user_id}_{epoch_millis(moment)}"
