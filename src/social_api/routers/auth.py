from fastapi import APIRouter, Depends, HTTPException, status

from social_api.dependencies import get_app_settings, users_service
from social_api.db_layer import UserService
from social_api.schemas import (
    AccountCreatedResponse,
    LoginRequest,
    SendCodeRequest,
    SendCodeResponse,
    UserResponse,
    VerifyCodeRequest,
)
from social_api.settings import Settings

router = APIRouter()


@router.post("/auth/send-code", response_model=SendCodeResponse)
def send_code(
    body: SendCodeRequest,
    settings: Settings = Depends(get_app_settings),
    users: UserService = Depends(users_service),
) -> SendCodeResponse:
    """
    Start a sign-up: issue a verification code for the email.

    Codes are not emailed; they are logged and, when enabled in settings,
    echoed back as `demoCode`.
    """
    if not body.email or not body.name or not body.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    code = users.send_code(body.email, body.name, body.password)
    return SendCodeResponse(
        success=True,
        message="Verification code sent",
        demo_code=code if settings.expose_verification_code else None,
    )


@router.post("/auth/verify-code", response_model=AccountCreatedResponse, status_code=status.HTTP_201_CREATED)
def verify_code(
    body: VerifyCodeRequest,
    users: UserService = Depends(users_service),
) -> AccountCreatedResponse:
    """Redeem a verification code and create the account."""
    if not body.email or not body.code:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and code are required")

    user = users.verify_code(body.email, body.code)
    return AccountCreatedResponse(message="Account created successfully!", user=user.to_public())


@router.post("/auth/login", response_model=UserResponse)
def login(
    body: LoginRequest,
    users: UserService = Depends(users_service),
) -> UserResponse:
    user = users.login(body.email, body.password)
    return UserResponse(user=user.to_public())
