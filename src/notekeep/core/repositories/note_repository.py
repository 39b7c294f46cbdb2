"""Note repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _search_condition(query: str):
    # literal substring match, wildcards in the query are escaped
    pattern = f"%{_escape_like(query)}%"
    return or_(
        Note.title.ilike(pattern, escape="\\"),
        Note.content.ilike(pattern, escape="\\"),
    )


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, owner_id: UUID, title: str, content: str) -> Note:
        """Create new note."""
        note = Note(owner_id=owner_id, title=title, content=content)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, note_id: UUID) -> bool:
        """Check if a note with this ID exists at all."""
        stmt = select(Note.id).where(Note.id == note_id).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def owner_of(self, note_id: UUID) -> Optional[UUID]:
        """Get the owning user ID of a note, None if the note is gone."""
        stmt = select(Note.owner_id).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_note(self, note_id: UUID, update_data: dict) -> Optional[Note]:
        """Update note fields."""
        note = await self.get_by_id(note_id)
        if not note:
            return None

        for key, value in update_data.items():
            setattr(note, key, value)

        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note_id: UUID) -> Optional[Note]:
        """Delete note, returning the deleted row."""
        note = await self.get_by_id(note_id)
        if not note:
            return None

        await self.session.delete(note)
        await self.session.commit()
        return note

    async def list_user_notes(
        self, user_id: UUID, offset: int = 0, limit: int = 10
    ) -> tuple[List[Note], int]:
        """List user notes, newest first, with the total count."""
        count_stmt = select(func.count(Note.id)).where(Note.owner_id == user_id)
        total_count = (await self.session.execute(count_stmt)).scalar() or 0

        stmt = (
            select(Note)
            .where(Note.owner_id == user_id)
            .order_by(desc(Note.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars()), total_count

    async def search_user_notes(
        self, user_id: UUID, query: str, offset: int = 0, limit: int = 10
    ) -> tuple[List[Note], int]:
        """Case-insensitive substring search over title and content."""
        condition = _search_condition(query)

        count_stmt = select(func.count(Note.id)).where(Note.owner_id == user_id, condition)
        total_count = (await self.session.execute(count_stmt)).scalar() or 0

        stmt = (
            select(Note)
            .where(Note.owner_id == user_id, condition)
            .order_by(desc(Note.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars()), total_count
