"""Note ownership checks."""

from typing import Optional, Protocol
from uuid import UUID

from ..errors import AppError


class NoteOwnershipStore(Protocol):
    async def exists(self, note_id: UUID) -> bool: ...

    async def owner_of(self, note_id: UUID) -> Optional[UUID]: ...


class OwnershipGuard:
    """Makes sure a note belongs to the authenticated user.

    Existence is checked before ownership: a missing note is NOT_FOUND,
    someone else's note is AUTHORIZATION.
    """

    def __init__(self, notes: NoteOwnershipStore):
        self.notes = notes

    async def assert_ownership(self, user_id: UUID, note_id: UUID) -> None:
        if not await self.notes.exists(note_id):
            raise AppError.not_found("Note not found")

        owner_id = await self.notes.owner_of(note_id)
        if owner_id is None:
            # deleted between the two queries
            raise AppError.not_found("Note not found")
        if owner_id != user_id:
            raise AppError.authorization("You do not have permission to access this note")
