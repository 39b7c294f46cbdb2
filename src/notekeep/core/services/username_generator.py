"""Username generation from an email local part."""

import logging
import re
import secrets
from typing import Awaitable, Callable

from ..errors import AppError

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
MAX_BASE_LENGTH = 40


def sanitize_base(base: str) -> str:
    """Lowercase and keep only ASCII letters and digits."""
    return _NON_ALNUM.sub("", base.lower())[:MAX_BASE_LENGTH]


def generate_username(base: str = "") -> str:
    """One random candidate: sanitized base + 4 digits, or 'user' + 5 digits."""
    sanitized = sanitize_base(base) if base else ""
    if sanitized:
        return f"{sanitized}{1000 + secrets.randbelow(9000)}"
    return f"user{10000 + secrets.randbelow(90000)}"


class UsernameGenerator:
    """Finds a free username with a bounded number of random attempts.

    ``username_exists`` is the credential store's existence check. Running
    out of attempts raises instead of handing back a name that may be taken.
    """

    def __init__(self, username_exists: Callable[[str], Awaitable[bool]], max_attempts: int = 5):
        self.username_exists = username_exists
        self.max_attempts = max_attempts

    async def generate_unique(self, local_part: str) -> str:
        for attempt in range(1, self.max_attempts + 1):
            candidate = generate_username(local_part)
            if not await self.username_exists(candidate):
                return candidate
            logger.debug(f"Username candidate collided (attempt {attempt}/{self.max_attempts})")

        logger.error(
            "Username generation exhausted",
            extra={"base": sanitize_base(local_part), "attempts": self.max_attempts},
        )
        raise AppError.generation_exhausted(self.max_attempts)
