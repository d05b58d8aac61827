"""Error types of the Social API and the handlers that turn them into responses."""

import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SocialApiError(Exception):
    """Base class for errors that map onto a client-facing HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecordNotFound(SocialApiError):
    status_code = status.HTTP_404_NOT_FOUND


class EmailAlreadyRegistered(SocialApiError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, email: str):
        super().__init__(f"An account with email {email} already exists")
        self.email = email


class InvalidCredentials(SocialApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("Invalid email or password")


class VerificationError(SocialApiError):
    """A verification code could not be redeemed."""


class VerificationCodeNotFound(VerificationError):
    def __init__(self, email: str):
        super().__init__(f"No pending verification code for {email}")


class VerificationCodeExpired(VerificationError):
    def __init__(self, email: str):
        super().__init__(f"Verification code for {email} has expired")


class VerificationCodeMismatch(VerificationError):
    def __init__(self, email: str):
        super().__init__(f"Invalid verification code for {email}")


async def handle_social_api_errors(request: Request, exc: SocialApiError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    """Validation errors raised inside handlers (not request parsing) become a 422."""
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [
                {
                    "loc": list(error.get("loc", [])),
                    "msg": error["msg"],
                    "type": error["type"],
                }
                for error in errors
            ]
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(err)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
