"""Note service implementation."""

import logging
from uuid import UUID

from ..errors import AppError
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from .interfaces import INoteService
from .ownership import OwnershipGuard

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """CRUD over the caller's own notes. Every by-id call goes through the ownership guard."""

    def __init__(self, note_repo: NoteRepository, guard: OwnershipGuard = None):
        self.note_repo = note_repo
        self.guard = guard or OwnershipGuard(note_repo)

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        note = await self.note_repo.create_note(
            owner_id=user_id, title=request.title.strip(), content=request.content.strip()
        )
        logger.debug(f"Created note {note.id} for user {user_id}")
        return NoteResponse.model_validate(note)

    async def get_note(self, user_id: UUID, note_id: UUID) -> NoteResponse:
        """Get note by ID."""
        await self.guard.assert_ownership(user_id, note_id)

        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise AppError.not_found("Note not found")
        return NoteResponse.model_validate(note)

    async def update_note(self, user_id: UUID, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note (partial)."""
        await self.guard.assert_ownership(user_id, note_id)

        update_data = {}
        if request.title is not None:
            update_data["title"] = request.title.strip()
        if request.content is not None:
            update_data["content"] = request.content.strip()

        if not update_data:
            raise AppError.validation("No valid fields to update")

        note = await self.note_repo.update_note(note_id, update_data)
        if not note:
            raise AppError.not_found("Note not found")
        return NoteResponse.model_validate(note)

    async def delete_note(self, user_id: UUID, note_id: UUID) -> NoteResponse:
        """Delete note and return what was deleted."""
        await self.guard.assert_ownership(user_id, note_id)

        note = await self.note_repo.delete_note(note_id)
        if not note:
            raise AppError.not_found("Note not found")
        logger.debug(f"Deleted note {note_id} for user {user_id}")
        return NoteResponse.model_validate(note)

    async def list_notes(self, user_id: UUID, page: int = 1, per_page: int = 10) -> NoteListResponse:
        """List user notes with pagination."""
        offset = (page - 1) * per_page
        notes, total = await self.note_repo.list_user_notes(user_id, offset=offset, limit=per_page)
        items = [NoteResponse.model_validate(n) for n in notes]
        return NoteListResponse.create(items=items, total=total, page=page, per_page=per_page)

    async def search_notes(
        self, user_id: UUID, query: str, page: int = 1, per_page: int = 10
    ) -> NoteListResponse:
        """Search user notes by title/content."""
        query = (query or "").strip()
        if not query:
            raise AppError.validation("Search query is required")

        offset = (page - 1) * per_page
        notes, total = await self.note_repo.search_user_notes(
            user_id, query, offset=offset, limit=per_page
        )
        items = [NoteResponse.model_validate(n) for n in notes]
        return NoteListResponse.create(items=items, total=total, page=page, per_page=per_page)
