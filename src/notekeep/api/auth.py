"""Authentication API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from ..config import Settings
from ..core.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from ..core.errors import AppError
from ..core.schemas.auth import (
    AccessTokenResponse,
    RefreshTokenRequest,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    UserResponse,
)
from ..core.schemas.common import MessageResponse
from ..core.services import AuthService
from ..middleware.auth import get_current_user_id
from ..middleware.rate_limit import RateLimit
from ..security.jwt import TokenKind, TokenService
from .deps import get_auth_service, get_settings_from_app, get_token_service

router = APIRouter(prefix="/auth", tags=["authentication"])

auth_rate_limit = Depends(RateLimit("auth"))


def _set_token_cookie(response: Response, settings: Settings, name: str, value: str, max_age: int):
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[auth_rate_limit],
)
async def signup(request: SignUpRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Register a new user. The username is generated from the email."""
    return await auth_service.sign_up(request.email, request.password)


@router.post("/signin", response_model=SignInResponse, dependencies=[auth_rate_limit])
async def signin(
    request: SignInRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings_from_app),
):
    """Sign in and receive an access/refresh token pair, also set as cookies."""
    result = await auth_service.sign_in(request.email, request.password)

    _set_token_cookie(response, settings, ACCESS_TOKEN_COOKIE, result.access_token, tokens.access_expires_in)
    _set_token_cookie(response, settings, REFRESH_TOKEN_COOKIE, result.refresh_token, tokens.refresh_expires_in)
    return result


@router.post("/refresh-token", response_model=AccessTokenResponse, dependencies=[auth_rate_limit])
async def refresh_token(
    request: Request,
    response: Response,
    body: Optional[RefreshTokenRequest] = None,
    auth_service: AuthService = Depends(get_auth_service),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings_from_app),
):
    """Mint a new access token from the refresh token cookie (or body)."""
    token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not token and body is not None:
        token = body.refresh_token
    if not token:
        raise AppError.authentication("Refresh token is required")

    payload = tokens.verify(token, TokenKind.REFRESH)
    access_token = await auth_service.refresh_token(payload.user_id)

    _set_token_cookie(response, settings, ACCESS_TOKEN_COOKIE, access_token, tokens.access_expires_in)
    return AccessTokenResponse(access_token=access_token, expires_in=tokens.access_expires_in)


@router.post("/logout", response_model=MessageResponse, dependencies=[auth_rate_limit])
async def logout(response: Response, settings: Settings = Depends(get_settings_from_app)):
    """Clear both token cookies. Issued tokens stay valid until they expire."""
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(name, httponly=True, secure=settings.is_production, samesite="strict")
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    current_user_id: UUID = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get current user profile."""
    return await auth_service.validate_user(current_user_id)
