"""Authentication service implementation."""

import logging
from typing import Iterable, Optional
from uuid import UUID

from ...security.jwt import TokenService
from ...security.password_policy import PasswordPolicy
from ..constants import BLOCKED_EMAIL_DOMAINS
from ..errors import AppError
from ..repositories.user_repository import UserRepository, normalize_email
from ..schemas.auth import SignInResponse, UserResponse
from .interfaces import IAuthService
from .username_generator import UsernameGenerator

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Signup, signin and access token refresh.

    Collaborators are passed in; the service holds no state of its own.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        tokens: TokenService,
        passwords: PasswordPolicy,
        usernames: Optional[UsernameGenerator] = None,
        blocked_email_domains: Iterable[str] = BLOCKED_EMAIL_DOMAINS,
    ):
        self.user_repo = user_repo
        self.tokens = tokens
        self.passwords = passwords
        self.usernames = usernames or UsernameGenerator(user_repo.username_exists)
        self.blocked_email_domains = {d.lower() for d in blocked_email_domains}

    async def sign_up(self, email: str, password: str) -> UserResponse:
        """Register new user. Not idempotent: a second signup with the same email conflicts."""
        if not email or not password:
            raise AppError.validation("Email and password are required")

        email = normalize_email(email)
        local_part, _, domain = email.rpartition("@")
        if not local_part or not domain:
            raise AppError.validation("Invalid email format")
        if domain in self.blocked_email_domains:
            raise AppError.validation("Email domain not allowed")

        self.passwords.validate_strength(password)

        if await self.user_repo.email_exists(email):
            raise AppError.conflict("User already exists")

        username = await self.usernames.generate_unique(local_part)
        password_hash = await self.passwords.hash_async(password)

        # the unique constraint still decides if another signup got in first
        user = await self.user_repo.create_user(email, username, password_hash)

        logger.info("User signed up", extra={"user_id": str(user.id), "username": username})
        return UserResponse.model_validate(user)

    async def sign_in(self, email: str, password: str) -> SignInResponse:
        """Check credentials and issue an access/refresh token pair.

        Unknown email and wrong password fail with the same error, and the
        unknown-email path still pays for a hash check.
        """
        if not email or not password:
            raise AppError.validation("Email and password are required")

        user = await self.user_repo.get_by_email(email)
        if not user:
            await self.passwords.dummy_verify_async()
            logger.info("Sign in failed")
            raise AppError.authentication("Invalid credentials")

        if not await self.passwords.verify_async(password, user.password_hash):
            logger.info("Sign in failed", extra={"user_id": str(user.id)})
            raise AppError.authentication("Invalid credentials")

        if self.passwords.needs_update(user.password_hash):
            new_hash = await self.passwords.hash_async(password)
            await self.user_repo.update_password_hash(user.id, new_hash)
            logger.info("Rehashed password with current cost", extra={"user_id": str(user.id)})

        return SignInResponse(
            user=UserResponse.model_validate(user),
            access_token=self.tokens.issue_access(user.id),
            refresh_token=self.tokens.issue_refresh(user.id),
            token_type="bearer",
            expires_in=self.tokens.access_expires_in,
        )

    async def refresh_token(self, user_id: Optional[UUID]) -> str:
        """Mint a new access token. The refresh token itself is not rotated."""
        if not user_id:
            raise AppError.validation("User ID is required")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise AppError.not_found("User not found")

        return self.tokens.issue_access(user.id)

    async def validate_user(self, user_id: Optional[UUID]) -> UserResponse:
        """Confirm a token subject still maps to a live account."""
        if not user_id:
            raise AppError.validation("User ID is required")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise AppError.not_found("User not found")

        return UserResponse.model_validate(user)
