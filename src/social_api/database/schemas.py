"""
Document schemas for the blob-backed collections.

Each stored object is the camelCase JSON of one of these models. Drafts carry
the caller-supplied fields; the store assigns ``id`` and ``createdAt``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing_extensions import Self


class MessageType(str, Enum):
    """Enumeration for message kinds"""
    TEXT = 'text'
    VOICE = 'voice'
    IMAGE = 'image'
    VIDEO = 'video'


class MediaType(str, Enum):
    """Enumeration for attachable media kinds"""
    IMAGE = 'image'
    VIDEO = 'video'


MAX_NAME_LENGTH = 100
MIN_EMAIL_LENGTH = 3


def normalize_email(email: str) -> str:
    return email.strip().lower()


def blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class DocumentSchema(BaseModel):
    """Base for stored documents: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class StoredFields(DocumentSchema):
    """Fields the store assigns on insert"""
    id: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_is_utc(cls, v: datetime) -> datetime:
        # Stored timestamps without an offset are UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


# Users
class UserDraft(DocumentSchema):
    """Schema for a user before it is stored"""
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH, description="Display name")
    email: str = Field(..., min_length=MIN_EMAIL_LENGTH, description="Unique login email")
    password_hash: str = Field(..., description="Salted password hash")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")

    @field_validator("email")
    @classmethod
    def lower_case_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("profile_picture", mode="before")
    @classmethod
    def blank_picture_is_none(cls, v):
        return blank_to_none(v)


class User(UserDraft, StoredFields):
    """Schema for stored user documents"""

    def to_public(self) -> "PublicUser":
        return PublicUser(
            id=self.id,
            name=self.name,
            email=self.email,
            profile_picture=self.profile_picture,
            created_at=self.created_at,
        )


class PublicUser(DocumentSchema):
    """A user as shown to other users; never carries the password hash"""
    id: str
    name: str
    email: str
    profile_picture: Optional[str] = None
    created_at: Optional[datetime] = None


# Messages
class MessageDraft(DocumentSchema):
    """
    Schema for a chat message before it is stored.

    A message with a receiver is private, one without is public. The message
    ``type`` decides which payload field is required.
    """
    content: Optional[str] = None
    voice_url: Optional[str] = None
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None
    sender_id: str = Field(..., min_length=1)
    sender_name: str = Field(..., min_length=1)
    sender_profile_picture: Optional[str] = None
    receiver_id: Optional[str] = None
    receiver_name: Optional[str] = None
    type: MessageType = MessageType.TEXT

    @field_validator(
        "content", "voice_url", "media_url", "media_type",
        "sender_profile_picture", "receiver_id", "receiver_name",
        mode="before",
    )
    @classmethod
    def blank_optionals_are_none(cls, v):
        return blank_to_none(v)

    @model_validator(mode="after")
    def check_payload_matches_type(self) -> Self:
        if self.receiver_name and not self.receiver_id:
            raise ValueError("receiverName given without receiverId")

        if self.type == MessageType.TEXT and not self.content:
            raise ValueError("text messages need content")
        if self.type == MessageType.VOICE and not self.voice_url:
            raise ValueError("voice messages need voiceUrl")
        if self.type in (MessageType.IMAGE, MessageType.VIDEO):
            if not self.media_url:
                raise ValueError(f"{self.type.value} messages need mediaUrl")
            if self.media_type is None:
                self.media_type = MediaType(self.type.value)
            elif self.media_type.value != self.type.value:
                raise ValueError("mediaType does not match message type")
        return self

    @property
    def is_private(self) -> bool:
        return self.receiver_id is not None


class Message(MessageDraft, StoredFields):
    """Schema for stored message documents"""


# Comments
class CommentDraft(DocumentSchema):
    """Schema for a comment on a media item before it is stored"""
    media_id: str
    user_id: str = Field(..., min_length=1)
    user_name: str = Field(..., min_length=1)
    user_profile_picture: Optional[str] = None
    content: str = Field(..., max_length=2000)

    @field_validator("media_id")
    @classmethod
    def media_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("user_profile_picture", mode="before")
    @classmethod
    def blank_picture_is_none(cls, v):
        return blank_to_none(v)


class Comment(CommentDraft, StoredFields):
    """Schema for stored comment documents"""


# Likes
class LikeDraft(DocumentSchema):
    """Schema for a like before it is stored"""
    media_id: str
    user_id: str
    user_name: str = Field(..., min_length=1)

    @field_validator("media_id", "user_id")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class Like(LikeDraft, StoredFields):
    """Schema for stored like documents"""
