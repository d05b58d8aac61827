from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from social_api.dependencies import users_service
from social_api.db_layer import UserService
from social_api.schemas import (
    DEFAULT_USER_SEARCH_LIMIT,
    MAX_USER_SEARCH_LIMIT,
    UpdateProfileRequest,
    UserResponse,
    UsersResponse,
)

router = APIRouter()


@router.get("/users", response_model=UsersResponse)
def search_users(
    q: Optional[str] = Query(None, description="Substring of the name or email"),
    exclude_id: Optional[str] = Query(None, alias="excludeId", description="Usually the caller's own id"),
    limit: int = Query(DEFAULT_USER_SEARCH_LIMIT, ge=1, le=MAX_USER_SEARCH_LIMIT),
    users: UserService = Depends(users_service),
) -> UsersResponse:
    """Find users to chat with, newest accounts first."""
    return UsersResponse(users=users.search_users(query=q, exclude_id=exclude_id, limit=limit))


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str = Path(..., description="The user id"),
    users: UserService = Depends(users_service),
) -> UserResponse:
    return UserResponse(user=users.get_user(user_id).to_public())


@router.patch("/users/{user_id}", response_model=UserResponse)
def update_profile(
    body: UpdateProfileRequest,
    user_id: str = Path(..., description="The user id"),
    users: UserService = Depends(users_service),
) -> UserResponse:
    """Change the display name and/or profile picture URL."""
    user = users.update_profile(user_id, name=body.name, profile_picture=body.profile_picture)
    return UserResponse(user=user.to_public())
