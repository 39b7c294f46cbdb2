"""Repository layer for data access."""

from .note_repository import NoteRepository
from .user_repository import UserRepository, normalize_email

__all__ = ["UserRepository", "NoteRepository", "normalize_email"]
