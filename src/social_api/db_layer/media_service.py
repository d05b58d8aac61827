"""
Media service for the Social API.

Media files are plain objects under ``media/``; there is no typed record for
them, so a media item is whatever the object listing returns and its id is
the object key. Comments and likes hang off that id.
"""

import logging
from datetime import datetime
from pathlib import PurePosixPath
from typing import List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from social_api.database import BlobDocumentStore, keys
from social_api.database.schemas import Comment, CommentDraft, Like, LikeDraft, MediaType
from social_api.s3.delete_objects import delete_s3_object
from social_api.s3.read_objects import (
    fetch_s3_objects_metadata,
    generate_object_url,
    object_exists_in_s3,
)
from social_api.s3.write_objects import upload_s3_object
from social_api.schemas import DeleteResult, MediaItem

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "svg"}
VIDEO_EXTENSIONS = {"mp4", "mov", "avi", "mkv", "webm"}


def media_type_for(filename: str) -> MediaType:
    """Videos are recognised by extension; everything else is shown as an image"""
    extension = PurePosixPath(filename).suffix.lstrip(".").lower()
    return MediaType.VIDEO if extension in VIDEO_EXTENSIONS else MediaType.IMAGE


def unique_media_name(filename: str, millis: int) -> str:
    """``photo.jpg`` -> ``photo-<millis>.jpg``"""
    path = PurePosixPath(filename or "upload")
    stem = path.stem or "upload"
    if path.suffix:
        return f"{stem}-{millis}{path.suffix}"
    return f"{stem}-{millis}"


class MediaService:
    """Service for media files and the comments and likes attached to them"""

    def __init__(
        self,
        store: BlobDocumentStore,
        public_base_url: Optional[str] = None,
        url_expiry_seconds: int = 3600,
    ):
        self.store = store
        self.public_base_url = public_base_url
        self.url_expiry_seconds = url_expiry_seconds

    @property
    def bucket_name(self) -> str:
        return self.store.bucket_name

    @property
    def s3_client(self) -> Optional["S3Client"]:
        return self.store.s3_client

    def object_url(self, object_key: str) -> str:
        return generate_object_url(
            self.bucket_name,
            object_key,
            public_base_url=self.public_base_url,
            expires_in=self.url_expiry_seconds,
            s3_client=self.s3_client,
        )

    def store_file(
        self, object_key: str, content: bytes, content_type: Optional[str] = None
    ) -> str:
        """Upload raw bytes and return a URL for them"""
        upload_s3_object(
            bucket_name=self.bucket_name,
            object_key=object_key,
            file_content=content,
            content_type=content_type,
            s3_client=self.s3_client,
        )
        logger.info(f"Uploaded {object_key} ({len(content)} bytes)")
        return self.object_url(object_key)

    def _to_media_item(self, object_key: str, size: int, uploaded_at: datetime) -> MediaItem:
        name = PurePosixPath(object_key).name
        return MediaItem(
            id=object_key,
            name=name,
            type=media_type_for(name),
            extension=PurePosixPath(name).suffix.lstrip(".").lower(),
            url=self.object_url(object_key),
            size=size,
            uploaded_at=uploaded_at,
        )

    # ==========================================
    # Media files
    # ==========================================

    def list_media(self) -> List[MediaItem]:
        """Every file under ``media/``, most recently uploaded first"""
        try:
            objects = fetch_s3_objects_metadata(
                self.bucket_name, prefix=f"{keys.MEDIA}/", s3_client=self.s3_client
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error listing media: {e}")
            return []

        media = [
            self._to_media_item(obj["Key"], obj["Size"], obj["LastModified"])
            for obj in objects
        ]
        media.sort(key=lambda item: item.uploaded_at, reverse=True)
        logger.info(f"Returning {len(media)} media items")
        return media

    def upload_media(self, files: List[Tuple[str, bytes, Optional[str]]]) -> List[MediaItem]:
        """Store ``(filename, content, content_type)`` triples under unique keys"""
        uploaded = []
        for filename, content, content_type in files:
            now = self.store.now()
            object_key = keys.build_key(
                keys.MEDIA, unique_media_name(filename, keys.epoch_millis(now))
            )
            self.store_file(object_key, content, content_type)
            uploaded.append(self._to_media_item(object_key, len(content), now))
        return uploaded

    def delete_media(self, media_ids: List[str]) -> List[DeleteResult]:
        """Delete media files by id, reporting per id instead of failing the batch"""
        results = []
        for media_id in media_ids:
            if not media_id.startswith(f"{keys.MEDIA}/"):
                results.append(DeleteResult(id=media_id, success=False, error="Not a media item"))
                continue
            try:
                if not object_exists_in_s3(self.bucket_name, media_id, s3_client=self.s3_client):
                    results.append(DeleteResult(id=media_id, success=False, error="Not found"))
                    continue
                delete_s3_object(self.bucket_name, media_id, s3_client=self.s3_client)
                results.append(DeleteResult(id=media_id, success=True))
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Failed to delete media {media_id}: {e}")
                results.append(DeleteResult(id=media_id, success=False, error=str(e)))

        failed = [result for result in results if not result.success]
        logger.info(f"Media deletion results: {len(results) - len(failed)} successful, {len(failed)} failed")
        return results

    # ==========================================
    # Comments
    # ==========================================

    def get_comments(self, media_id: str) -> List[Comment]:
        return self.store.get_comments(media_id)

    def add_comment(self, draft: CommentDraft) -> Comment:
        return self.store.add_comment(draft)

    # ==========================================
    # Likes
    # ==========================================

    def get_likes(self, media_id: str) -> List[Like]:
        return self.store.get_likes(media_id)

    def like(self, draft: LikeDraft) -> Like:
        """Like a media item; liking it again returns the existing like"""
        existing = next(
            (like for like in self.store.get_likes(draft.media_id) if like.user_id == draft.user_id),
            None,
        )
        if existing is not None:
            return existing
        return self.store.add_like(draft)

    def unlike(self, media_id: str, user_id: str) -> bool:
        return self.store.remove_like(media_id, user_id)


def get_media_service(
    store: BlobDocumentStore,
    public_base_url: Optional[str] = None,
    url_expiry_seconds: int = 3600,
) -> MediaService:
    """Get media service instance"""
    return MediaService(store, public_base_url, url_expiry_seconds)
