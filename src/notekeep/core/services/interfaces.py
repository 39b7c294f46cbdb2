"""
Service interfaces for NoteKeep.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from ..schemas.auth import SignInResponse, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Auth service: signup, signin, token refresh."""

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> UserResponse:
        """Register new user."""
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> SignInResponse:
        """Check credentials and issue tokens."""
        pass

    @abstractmethod
    async def refresh_token(self, user_id: Optional[UUID]) -> str:
        """Issue a new access token."""
        pass

    @abstractmethod
    async def validate_user(self, user_id: Optional[UUID]) -> UserResponse:
        """Get a live user by ID."""
        pass


class INoteService(ABC):
    """Note service for CRUD operations."""

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def get_note(self, user_id: UUID, note_id: UUID) -> NoteResponse:
        """Get note by ID."""
        pass

    @abstractmethod
    async def update_note(self, user_id: UUID, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""
        pass

    @abstractmethod
    async def delete_note(self, user_id: UUID, note_id: UUID) -> NoteResponse:
        """Delete note."""
        pass

    @abstractmethod
    async def list_notes(self, user_id: UUID, page: int = 1, per_page: int = 10) -> NoteListResponse:
        """List user notes with pagination."""
        pass

    @abstractmethod
    async def search_notes(
        self, user_id: UUID, query: str, page: int = 1, per_page: int = 10
    ) -> NoteListResponse:
        """Search user notes by title/content."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
