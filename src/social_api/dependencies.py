"""FastAPI dependencies that hand the request its services."""

from fastapi import Request

from social_api.database import BlobDocumentStore
from social_api.db_layer import (
    ChatService,
    MediaService,
    UserService,
    get_chat_service,
    get_media_service,
    get_user_service,
)
from social_api.settings import Settings
from social_api.verification import VerificationCodeStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> BlobDocumentStore:
    return request.app.state.store


def get_verification_store(request: Request) -> VerificationCodeStore:
    return request.app.state.verification


def users_service(request: Request) -> UserService:
    settings = get_app_settings(request)
    return get_user_service(
        get_store(request),
        get_verification_store(request),
        min_password_length=settings.min_password_length,
    )


def media_service(request: Request) -> MediaService:
    settings = get_app_settings(request)
    return get_media_service(
        get_store(request),
        public_base_url=settings.public_base_url,
        url_expiry_seconds=settings.presigned_url_expiry_seconds,
    )


def chat_service(request: Request) -> ChatService:
    return get_chat_service(get_store(request), media_service(request))
