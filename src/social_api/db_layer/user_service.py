"""
User service for the Social API.
Handles sign-up through verification codes, login, search and profile updates.
"""

import logging
from typing import List, Optional

from social_api.database import BlobDocumentStore
from social_api.database.schemas import (
    MAX_NAME_LENGTH,
    MIN_EMAIL_LENGTH,
    PublicUser,
    User,
    UserDraft,
    normalize_email,
)
from social_api.errors import (
    EmailAlreadyRegistered,
    InvalidCredentials,
    RecordNotFound,
    SocialApiError,
)
from social_api.security import MAX_PASSWORD_BYTES, hash_password, verify_password
from social_api.verification import VerificationCodeStore

logger = logging.getLogger(__name__)

DEFAULT_MIN_PASSWORD_LENGTH = 6


class UserService:
    """Service for user documents and the sign-up flow"""

    def __init__(
        self,
        store: BlobDocumentStore,
        verification: VerificationCodeStore,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ):
        self.store = store
        self.verification = verification
        self.min_password_length = min_password_length

    def check_name(self, name: str) -> str:
        """Strip a display name and enforce the stored length bounds"""
        name = name.strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            raise SocialApiError(f"Name must be between 1 and {MAX_NAME_LENGTH} characters")
        return name

    def send_code(self, email: str, name: str, password: str) -> str:
        """
        Start a sign-up and return the verification code to deliver.

        Everything the account will be created from is checked here, since the
        code is spent once it is redeemed.
        """
        name = self.check_name(name)
        if len(normalize_email(email)) < MIN_EMAIL_LENGTH or "@" not in email:
            raise SocialApiError("Invalid email address")
        if len(password) < self.min_password_length:
            raise SocialApiError(
                f"Password must be at least {self.min_password_length} characters"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise SocialApiError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        if self.store.get_user_by_email(email) is not None:
            raise EmailAlreadyRegistered(email)

        code = self.verification.issue(email, name, password)
        # No mail delivery; the log stands in for the email
        logger.info(f"Verification code for {email}: {code}")
        return code

    def verify_code(self, email: str, code: str) -> User:
        """Redeem a verification code and create the account it was issued for"""
        pending = self.verification.redeem(email, code)

        # Email uniqueness is only checked by scanning, so re-check right before the write
        if self.store.get_user_by_email(pending.email) is not None:
            raise EmailAlreadyRegistered(pending.email)

        user = self.store.add_user(
            UserDraft(
                name=pending.name,
                email=pending.email,
                password_hash=hash_password(pending.password),
            )
        )
        logger.info(f"Created user {user.id} for {user.email}")
        return user

    def login(self, email: str, password: str) -> User:
        user = self.store.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return user

    def get_user(self, user_id: str) -> User:
        user = self.store.get_user_by_id(user_id)
        if user is None:
            raise RecordNotFound(f"User {user_id} not found")
        return user

    def search_users(
        self,
        query: Optional[str] = None,
        exclude_id: Optional[str] = None,
        limit: int = 20,
    ) -> List[PublicUser]:
        """
        Users whose name or email contains the query, newest accounts first.

        Without a query this lists the most recently created users.
        """
        users = [user for user in self.store.get_users() if user.id != exclude_id]

        if query and query.strip():
            needle = query.strip().lower()
            users = [
                user for user in users
                if needle in user.name.lower() or needle in user.email
            ]

        users.sort(key=lambda user: user.created_at, reverse=True)
        return [user.to_public() for user in users[:limit]]

    def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        profile_picture: Optional[str] = None,
    ) -> User:
        updates = {}
        if name is not None:
            updates["name"] = self.check_name(name)
        if profile_picture is not None:
            updates["profile_picture"] = profile_picture

        if not updates:
            return self.get_user(user_id)

        user = self.store.update_user(user_id, updates)
        if user is None:
            raise RecordNotFound(f"User {user_id} not found")
        logger.info(f"Updated profile of user {user_id}: {sorted(updates)}")
        return user


def get_user_service(
    store: BlobDocumentStore,
    verification: VerificationCodeStore,
    min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
) -> UserService:
    """Get user service instance"""
    return UserService(store, verification, min_password_length)
