"""
Database models for NoteKeep.

Models included:
    - User: account with email, generated username and password hash
    - Note: text note owned by a user
"""

from .base import BaseModel
from .note import Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
]
