"""Per-request service wiring from the app-scoped singletons on ``app.state``."""

from typing import Optional

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..core.constants import BLOCKED_EMAIL_DOMAINS
from ..core.errors import AppError
from ..core.repositories import NoteRepository, UserRepository
from ..core.services import AuthService, HealthService, NoteService, UsernameGenerator
from ..database import get_db_session
from ..security.jwt import TokenService


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(
    request: Request, session: AsyncSession = Depends(get_db_session)
) -> AuthService:
    state = request.app.state
    user_repo = UserRepository(session)
    return AuthService(
        user_repo,
        tokens=state.token_service,
        passwords=state.password_policy,
        usernames=UsernameGenerator(
            user_repo.username_exists, max_attempts=state.settings.username_max_attempts
        ),
        blocked_email_domains=BLOCKED_EMAIL_DOMAINS | set(state.settings.blocked_email_domains),
    )


def get_note_service(session: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(NoteRepository(session))


def get_health_service(
    request: Request, session: AsyncSession = Depends(get_db_session)
) -> HealthService:
    state = request.app.state
    return HealthService(
        session, version=state.settings.app_version, redis_client=state.redis_client
    )


class PageParams:
    """Resolved ``page`` / ``per_page`` query parameters."""

    def __init__(self, page: int, per_page: int):
        self.page = page
        self.per_page = per_page


def get_page_params(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, description="Items per page"),
) -> PageParams:
    settings: Settings = request.app.state.settings
    if per_page is None:
        per_page = settings.default_page_size
    if per_page > settings.max_page_size:
        raise AppError.validation(f"per_page must not exceed {settings.max_page_size}")
    return PageParams(page, per_page)
