import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from textwrap import dedent
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from social_api.database import BlobDocumentStore
from social_api.errors import (
    SocialApiError,
    handle_broad_exceptions,
    handle_pydantic_validation_errors,
    handle_social_api_errors,
)
from social_api.routers.auth import router as auth_router
from social_api.routers.chat import router as chat_router
from social_api.routers.health import router as health_router
from social_api.routers.media import router as media_router
from social_api.routers.users import router as users_router
from social_api.s3.client import get_s3_client
from social_api.settings import Settings
from social_api.verification import VerificationCodeStore

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

# Set up logging
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the sweep of expired verification codes for the lifetime of the app."""
    settings: Settings = app.state.settings
    sweeper = asyncio.create_task(
        app.state.verification.run_periodic_sweep(settings.verification_sweep_interval_seconds)
    )
    logger.info("Started verification code sweeper")
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        logger.info("Stopped verification code sweeper")


def create_app(
    settings: Optional[Settings] = None,
    s3_client: Optional["S3Client"] = None,
    verification: Optional[VerificationCodeStore] = None,
) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="Social API",
        summary="Share media, comment, like and chat",
        version="v1",
        description=dedent(
            """\
        Media sharing and chat backed by a single S3 bucket.

        | Area | Notes |
        | --- | --- |
        | Auth | Sign-up is gated by a one-time verification code |
        | Media | Images and videos live under `media/`; their id is the object key |
        | Chat | One public room plus private threads between two users |
        """
        ),
        docs_url="/",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = BlobDocumentStore(
        bucket_name=settings.s3_bucket_name,
        s3_client=s3_client or get_s3_client(settings),
    )
    app.state.verification = verification or VerificationCodeStore(
        ttl=timedelta(seconds=settings.verification_code_ttl_seconds)
    )
    logger.info(f"Using bucket {settings.s3_bucket_name}")

    app.include_router(auth_router, prefix="/v1", tags=["auth"])
    app.include_router(users_router, prefix="/v1", tags=["users"])
    app.include_router(media_router, prefix="/v1", tags=["media"])
    app.include_router(chat_router, prefix="/v1", tags=["chat"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=SocialApiError,
        handler=handle_social_api_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
