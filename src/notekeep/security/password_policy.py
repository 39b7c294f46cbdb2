"""
Password strength rules applied at signup.

The policy owns the rules and the hasher so the auth service has one
collaborator for everything password related.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional

from ..core.constants import COMMON_PASSWORDS
from ..core.errors import AppError
from .password import PasswordHasher

logger = logging.getLogger(__name__)

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile(r"[\W_]")


def load_password_list(path: str) -> List[str]:
    """Read a deny-list file: one password per line, '#' starts a comment."""
    entries = []
    with Path(path).open("r", encoding="utf-8") as fh:
        for raw in fh:
            line = raw.strip()
            if line and not line.startswith("#"):
                entries.append(line)
    return entries


class PasswordPolicy:
    """Validates, hashes and verifies passwords."""

    def __init__(
        self,
        hasher: Optional[PasswordHasher] = None,
        min_length: int = 8,
        max_length: int = 30,
        common_passwords: Iterable[str] = COMMON_PASSWORDS,
    ):
        self.hasher = hasher or PasswordHasher()
        self.min_length = min_length
        self.max_length = max_length
        self._deny_list = {p.casefold() for p in common_passwords}

    @classmethod
    def from_settings(cls, settings) -> "PasswordPolicy":
        common = set(COMMON_PASSWORDS)
        if settings.common_passwords_file:
            extra = load_password_list(settings.common_passwords_file)
            logger.info(f"Loaded {len(extra)} extra deny-listed passwords")
            common.update(extra)
        return cls(
            hasher=PasswordHasher(rounds=settings.password_hash_rounds),
            min_length=settings.password_min_length,
            max_length=settings.password_max_length,
            common_passwords=common,
        )

    def check(self, password: str) -> List[str]:
        """Return the list of failed rules, empty when the password is acceptable."""
        errors = []
        if len(password) < self.min_length:
            errors.append(f"Password must be at least {self.min_length} characters")
        if len(password) > self.max_length:
            errors.append(f"Password must not be more than {self.max_length} characters")
        if not _LOWER.search(password):
            errors.append("Password must contain at least one lowercase letter")
        if not _UPPER.search(password):
            errors.append("Password must contain at least one uppercase letter")
        if not _DIGIT.search(password):
            errors.append("Password must contain at least one number")
        if not _SPECIAL.search(password):
            errors.append("Password must contain at least one special character")
        if password.casefold() in self._deny_list:
            errors.append("Password is too common")
        return errors

    def validate_strength(self, password: str) -> None:
        """Raise a WEAK_PASSWORD error listing every rule the password breaks."""
        errors = self.check(password)
        if errors:
            raise AppError.weak_password(errors)

    def hash(self, password: str) -> str:
        return self.hasher.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        return self.hasher.verify(password, hashed_password)

    def needs_update(self, hashed_password: str) -> bool:
        return self.hasher.needs_update(hashed_password)

    async def hash_async(self, password: str) -> str:
        return await self.hasher.hash_async(password)

    async def verify_async(self, password: str, hashed_password: str) -> bool:
        return await self.hasher.verify_async(password, hashed_password)

    async def dummy_verify_async(self) -> None:
        await self.hasher.dummy_verify_async()
