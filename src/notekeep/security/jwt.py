"""JWT token utilities."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from ..core.errors import AppError

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded, verified token claims."""

    user_id: UUID
    kind: TokenKind
    expires_at: datetime


class TokenService:
    """Issues and verifies access/refresh JWTs.

    Each kind has its own signing secret, so a refresh token never verifies
    as an access token (and the other way round) even before the ``type``
    claim is looked at.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(hours=5),
    ):
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh tokens must use distinct secrets")
        self._secrets = {TokenKind.ACCESS: access_secret, TokenKind.REFRESH: refresh_secret}
        self._ttls = {TokenKind.ACCESS: access_ttl, TokenKind.REFRESH: refresh_ttl}
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(
            access_secret=settings.access_token_secret,
            refresh_secret=settings.refresh_token_secret,
            algorithm=settings.jwt_algorithm,
            access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_ttl=timedelta(hours=settings.refresh_token_expire_hours),
        )

    @property
    def access_expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return int(self._ttls[TokenKind.ACCESS].total_seconds())

    @property
    def refresh_expires_in(self) -> int:
        """Refresh token lifetime in seconds."""
        return int(self._ttls[TokenKind.REFRESH].total_seconds())

    def _issue(self, user_id: UUID, kind: TokenKind, expires_delta: Optional[timedelta]) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._ttls[kind])
        to_encode: Dict[str, Any] = {
            "sub": str(user_id),
            "type": kind.value,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(to_encode, self._secrets[kind], algorithm=self.algorithm)

    def issue_access(self, user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
        """Create a short-lived access token for the user."""
        return self._issue(user_id, TokenKind.ACCESS, expires_delta)

    def issue_refresh(self, user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
        """Create a refresh token, only good for minting new access tokens."""
        return self._issue(user_id, TokenKind.REFRESH, expires_delta)

    def verify(self, token: str, kind: TokenKind) -> TokenPayload:
        """Verify a token of the given kind.

        Raises EXPIRED_TOKEN when the token checks out but has lapsed (client
        should try a refresh) and INVALID_TOKEN for anything else.
        """
        try:
            payload = jwt.decode(token, self._secrets[kind], algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AppError.expired_token()
        except JWTError as e:
            logger.debug(f"Rejected {kind.value} token: {e}")
            raise AppError.invalid_token()

        if payload.get("type") != kind.value:
            raise AppError.invalid_token()

        sub = payload.get("sub")
        if not sub:
            raise AppError.invalid_token()
        try:
            user_id = UUID(str(sub))
        except ValueError:
            raise AppError.invalid_token()

        exp = payload.get("exp")
        if exp is None:
            raise AppError.invalid_token()

        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        return TokenPayload(user_id=user_id, kind=kind, expires_at=expires_at)
