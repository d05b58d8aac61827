"""
Document store emulated on top of a flat S3 object store.

A collection is every object under ``<collection>/``; each record is one JSON
object named ``<id>.json``. There are no indexes and no transactions: reads
list the whole prefix and fetch every object, so a query costs one request per
stored record.

Read scans are best effort. A record that cannot be fetched or parsed is
logged and skipped, and a failed listing yields an empty result.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Type, TypeVar

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from social_api.s3.delete_objects import delete_s3_object
from social_api.s3.read_objects import (
    fetch_s3_object_bytes,
    fetch_s3_objects_metadata,
    object_exists_in_s3,
)
from social_api.s3.write_objects import upload_s3_object

from . import keys
from .schemas import (
    Comment,
    CommentDraft,
    DocumentSchema,
    Like,
    LikeDraft,
    Message,
    MessageDraft,
    User,
    UserDraft,
    normalize_email,
)
from .views import Conversation, build_conversations

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=DocumentSchema)

# Errors that make a single record unreadable without failing a scan
TRANSIENT_ERRORS = (ClientError, BotoCoreError, ValidationError)

# Fields the store owns; patches may not overwrite them
PROTECTED_FIELDS = {"id", "created_at", "createdAt"}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BlobDocumentStore:
    """Collection accessor for every entity type of the application"""

    def __init__(
        self,
        bucket_name: str,
        s3_client: Optional["S3Client"] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.bucket_name = bucket_name
        self.s3_client = s3_client
        self.clock = clock

    # ==========================================
    # Generic collection operations
    # ==========================================

    def now(self) -> datetime:
        # Millisecond precision, like the ids derived from it
        moment = self.clock()
        return moment.replace(microsecond=(moment.microsecond // 1000) * 1000)

    def _list_keys(self, collection: str) -> List[str]:
        """Keys of every object in a collection; empty when listing fails"""
        try:
            objects = fetch_s3_objects_metadata(
                self.bucket_name, prefix=f"{collection}/", s3_client=self.s3_client
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error listing collection {collection}: {e}")
            return []
        return [obj["Key"] for obj in objects]

    def _iter_records(self, collection: str, model: Type[D]) -> Iterator[Tuple[str, D]]:
        """Fetch records one at a time, skipping the unreadable ones"""
        for key in self._list_keys(collection):
            record = self._load(key, model)
            if record is not None:
                yield key, record

    def _scan(self, collection: str, model: Type[D]) -> List[Tuple[str, D]]:
        """Fetch every record of a collection along with its key"""
        return list(self._iter_records(collection, model))

    def _load(self, key: str, model: Type[D]) -> Optional[D]:
        try:
            body = fetch_s3_object_bytes(self.bucket_name, key, s3_client=self.s3_client)
            return model.model_validate_json(body)
        except TRANSIENT_ERRORS as e:
            logger.error(f"Error fetching document {key}: {e}")
            return None

    def _put(self, key: str, record: DocumentSchema) -> None:
        upload_s3_object(
            bucket_name=self.bucket_name,
            object_key=key,
            file_content=record.to_document(),
            content_type="application/json",
            s3_client=self.s3_client,
        )

    def list(self, collection: str, model: Type[D]) -> List[D]:
        """Every readable record of a collection, in key order"""
        return [record for _, record in self._scan(collection, model)]

    def add(self, collection: str, record: D) -> D:
        """Write a record at ``<collection>/<id>.json``. No existence check."""
        key = keys.build_key(collection, f"{record.id}.json")
        self._put(key, record)
        logger.info(f"Stored document {key}")
        return record

    def _locate(self, collection: str, record_id: str) -> Optional[str]:
        """
        Key of the record with an id: the canonical key when it exists,
        otherwise the first key in the collection ending in ``<id>.json``.
        """
        key = keys.build_key(collection, f"{record_id}.json")
        if object_exists_in_s3(self.bucket_name, key, s3_client=self.s3_client):
            return key

        suffix = f"/{keys.sanitize_segment(record_id)}.json"
        return next((k for k in self._list_keys(collection) if k.endswith(suffix)), None)

    def update(
        self, collection: str, record_id: str, patch: Dict[str, Any], model: Type[D]
    ) -> Optional[D]:
        """
        Merge a patch into a record and rewrite it at its original key.

        Returns None when no record with that id exists. Last write wins.
        """
        key = self._locate(collection, record_id)
        if key is None:
            logger.info(f"No document {record_id} in {collection} to update")
            return None

        current = self._load(key, model)
        if current is None:
            return None

        changes = {k: v for k, v in patch.items() if k not in PROTECTED_FIELDS}
        updated = model.model_validate({**current.model_dump(), **changes})
        self._put(key, updated)
        logger.info(f"Updated document {key}")
        return updated

    def delete_first(
        self, collection: str, model: Type[D], predicate: Callable[[D], bool]
    ) -> bool:
        """
        Delete the first record matching a predicate.

        Records are fetched one by one and fetching stops at the match.

        Not atomic: two concurrent calls may both find the same record, the
        second delete is then a no-op.
        """
        for key, record in self._iter_records(collection, model):
            if not predicate(record):
                continue
            try:
                delete_s3_object(self.bucket_name, key, s3_client=self.s3_client)
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Error deleting document {key}: {e}")
                continue
            logger.info(f"Deleted document {key}")
            return True
        return False

    # ==========================================
    # Public messages
    # ==========================================

    def get_public_messages(self) -> List[Message]:
        messages = self.list(keys.PUBLIC_MESSAGES, Message)
        return sorted(messages, key=lambda m: m.created_at)

    def add_public_message(self, draft: MessageDraft) -> Message:
        if draft.is_private:
            raise ValueError("Public messages cannot have a receiver")
        now = self.now()
        message = Message(**draft.model_dump(), id=keys.generate_id("msg", now), created_at=now)
        return self.add(keys.PUBLIC_MESSAGES, message)

    # ==========================================
    # Private messages
    # ==========================================

    def get_all_private_messages(self) -> List[Message]:
        return self.list(keys.PRIVATE_MESSAGES, Message)

    def get_private_messages(self, user1_id: str, user2_id: str) -> List[Message]:
        """Messages between two users in both directions, oldest first"""
        conversation = [
            message for message in self.get_all_private_messages()
            if (message.sender_id == user1_id and message.receiver_id == user2_id)
            or (message.sender_id == user2_id and message.receiver_id == user1_id)
        ]
        return sorted(conversation, key=lambda m: m.created_at)

    def add_private_message(self, draft: MessageDraft) -> Message:
        if not draft.is_private:
            raise ValueError("Private messages need a receiver")
        now = self.now()
        message = Message(**draft.model_dump(), id=keys.generate_id("msg", now), created_at=now)
        return self.add(keys.PRIVATE_MESSAGES, message)

    def get_conversations(self, user_id: str) -> List[Conversation]:
        return build_conversations(user_id, self.get_users(), self.get_all_private_messages())

    # ==========================================
    # Comments
    # ==========================================

    def get_comments(self, media_id: str) -> List[Comment]:
        if not media_id or not media_id.strip():
            logger.error(f"Invalid mediaId for get_comments: {media_id!r}")
            return []
        comments = self.list(keys.collection_prefix(keys.COMMENTS, media_id), Comment)
        return sorted(comments, key=lambda c: c.created_at)

    def add_comment(self, draft: CommentDraft) -> Comment:
        if not draft.media_id or not draft.media_id.strip():
            raise ValueError("Invalid mediaId for add_comment")
        now = self.now()
        comment = Comment(**draft.model_dump(), id=keys.generate_id("comment", now), created_at=now)
        return self.add(keys.collection_prefix(keys.COMMENTS, draft.media_id), comment)

    # ==========================================
    # Likes
    # ==========================================

    def get_likes(self, media_id: str) -> List[Like]:
        if not media_id or not media_id.strip():
            logger.error(f"Invalid mediaId for get_likes: {media_id!r}")
            return []
        return self.list(keys.collection_prefix(keys.LIKES, media_id), Like)

    def add_like(self, draft: LikeDraft) -> Like:
        if not draft.media_id or not draft.media_id.strip():
            raise ValueError("Invalid mediaId for add_like")
        now = self.now()
        like = Like(**draft.model_dump(), id=keys.generate_like_id(draft.user_id, now), created_at=now)
        return self.add(keys.collection_prefix(keys.LIKES, draft.media_id), like)

    def remove_like(self, media_id: str, user_id: str) -> bool:
        """
        Delete the like a user left on a media item.

        Only the first matching like is removed per call. Missing likes and
        blank ids are a no-op.
        """
        if not media_id or not media_id.strip() or not user_id or not user_id.strip():
            logger.error(f"Invalid parameters for remove_like: mediaId={media_id!r}, userId={user_id!r}")
            return False
        return self.delete_first(
            keys.collection_prefix(keys.LIKES, media_id),
            Like,
            lambda like: like.user_id == user_id,
        )

    # ==========================================
    # Users
    # ==========================================

    def get_users(self) -> List[User]:
        return self.list(keys.USERS, User)

    def get_user_by_email(self, email: str) -> Optional[User]:
        email = normalize_email(email)
        return next((user for user in self.get_users() if user.email == email), None)

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return next((user for user in self.get_users() if user.id == user_id), None)

    def add_user(self, draft: UserDraft) -> User:
        now = self.now()
        user = User(**draft.model_dump(), id=keys.generate_id("user", now), created_at=now)
        return self.add(keys.USERS, user)

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[User]:
        return self.update(keys.USERS, user_id, updates, User)
