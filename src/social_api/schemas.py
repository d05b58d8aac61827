####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from social_api.database.schemas import (
    MAX_NAME_LENGTH,
    Comment,
    Like,
    MediaType,
    Message,
    PublicUser,
)

DEFAULT_USER_SEARCH_LIMIT = 20
MAX_USER_SEARCH_LIMIT = 50


class ApiSchema(BaseModel):
    """camelCase JSON on the wire, snake_case attributes in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- auth --- #

class SendCodeRequest(ApiSchema):
    """Request body for `POST /v1/auth/send-code`."""
    email: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class SendCodeResponse(ApiSchema):
    """Response model for `POST /v1/auth/send-code`."""
    success: bool
    message: str
    demo_code: Optional[str] = Field(
        None,
        description="The issued code, only when codes are echoed for demos.",
    )


class VerifyCodeRequest(ApiSchema):
    """Request body for `POST /v1/auth/verify-code`."""
    email: Optional[str] = None
    code: Optional[str] = None


class LoginRequest(ApiSchema):
    """Request body for `POST /v1/auth/login`."""
    email: str
    password: str


class AccountCreatedResponse(ApiSchema):
    message: str
    user: PublicUser


class UserResponse(ApiSchema):
    user: PublicUser


# --- users --- #

class UsersResponse(ApiSchema):
    """Response model for `GET /v1/users`."""
    users: List[PublicUser]


class UpdateProfileRequest(ApiSchema):
    """Request body for `PATCH /v1/users/{user_id}`."""
    name: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    profile_picture: Optional[str] = None


# --- media --- #

class MediaItem(ApiSchema):
    """A file stored under `media/`. Its id is the object key."""
    id: str = Field(json_schema_extra={"example": "media/sunset-1714557600000.jpg"})
    name: str
    type: MediaType
    extension: str
    url: str
    size: int = Field(description="The size of the file in bytes.")
    uploaded_at: datetime
    uploaded_by: str = "User"
    tags: List[str] = Field(default_factory=list)


class MediaListResponse(ApiSchema):
    """Response model for `GET /v1/media`."""
    media: List[MediaItem]


class UploadMediaResponse(ApiSchema):
    """Response model for `POST /v1/media/upload`."""
    success: bool
    files: List[MediaItem]


class DeleteMediaRequest(ApiSchema):
    """Request body for `DELETE /v1/media`."""
    ids: List[str] = Field(..., min_length=1)


class DeleteResult(ApiSchema):
    id: str
    success: bool
    error: Optional[str] = None


class DeleteMediaResponse(ApiSchema):
    """Response model for `DELETE /v1/media`."""
    success: bool
    deleted_count: int
    blob_deletion_results: List[DeleteResult]


class CommentsResponse(ApiSchema):
    comments: List[Comment]


class CommentResponse(ApiSchema):
    comment: Comment


class LikeAction(str, Enum):
    """Enumeration for like toggles"""
    LIKE = 'like'
    UNLIKE = 'unlike'


class LikeRequest(ApiSchema):
    """Request body for `POST /v1/media/likes`."""
    media_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    user_name: str = Field(..., min_length=1)
    action: LikeAction = LikeAction.LIKE


class LikesResponse(ApiSchema):
    """Response model for `GET /v1/media/likes`."""
    count: int
    user_liked: bool
    likes: List[Like]


class LikeActionResponse(ApiSchema):
    """Response model for `POST /v1/media/likes`."""
    success: bool
    count: int
    user_liked: bool


# --- chat --- #

class MessagesResponse(ApiSchema):
    messages: List[Message]


class MessageResponse(ApiSchema):
    message: Message


class ChatUploadResponse(ApiSchema):
    """Response model for `POST /v1/chat/upload`."""
    success: bool
    url: str


class ConversationsResponse(ApiSchema):
    """Response model for `GET /v1/chat/conversations`, most recent first."""
    conversations: List[PublicUser]
