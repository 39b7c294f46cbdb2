"""Authentication middleware."""

from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer

from ..core.constants import ACCESS_TOKEN_COOKIE
from ..core.errors import AppError
from ..security.jwt import TokenKind, TokenService


class AccessGuard(HTTPBearer):
    """Access token authentication.

    The token comes from the ``accessToken`` cookie when present, otherwise
    from ``Authorization: Bearer``. No credential at all is FORBIDDEN (403);
    an expired one is EXPIRED_TOKEN and anything else INVALID_TOKEN (401).
    Only the signature is trusted here, there is no database lookup.
    """

    def __init__(self):
        super().__init__(auto_error=False, description="JWT access token")

    async def __call__(self, request: Request) -> UUID:
        token = request.cookies.get(ACCESS_TOKEN_COOKIE)
        if not token:
            credentials = await super().__call__(request)
            if credentials is None or not credentials.credentials:
                raise AppError.forbidden()
            token = credentials.credentials

        tokens: TokenService = request.app.state.token_service
        payload = tokens.verify(token, TokenKind.ACCESS)

        request.state.user_id = payload.user_id
        return payload.user_id


access_guard = AccessGuard()


# Dependency for getting current user ID from the access token
async def get_current_user_id(user_id: UUID = Depends(access_guard)) -> UUID:
    """Get current authenticated user ID."""
    return user_id
