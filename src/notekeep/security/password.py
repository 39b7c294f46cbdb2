"""Password hashing utilities."""

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """bcrypt hashing through a passlib context with a fixed cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            # hashes made with any other cost get flagged by needs_update
            bcrypt__min_rounds=rounds,
            bcrypt__max_rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self.context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        try:
            return self.context.verify(plain_password, hashed_password)
        except (UnknownHashError, ValueError):
            # not a hash we produced
            return False

    def needs_update(self, hashed_password: str) -> bool:
        """Check if password hash needs updating (e.g. cost factor changed)."""
        try:
            return self.context.needs_update(hashed_password)
        except (UnknownHashError, ValueError):
            return True

    def dummy_verify(self) -> None:
        """Spend the same time as a real verify without a real hash."""
        self.context.dummy_verify()

    # bcrypt is slow on purpose, keep it off the event loop

    async def hash_async(self, password: str) -> str:
        return await run_in_threadpool(self.hash, password)

    async def verify_async(self, plain_password: str, hashed_password: str) -> bool:
        return await run_in_threadpool(self.verify, plain_password, hashed_password)

    async def dummy_verify_async(self) -> None:
        await run_in_threadpool(self.dummy_verify)


_default_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password with the default cost."""
    return _default_hasher.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return _default_hasher.verify(plain_password, hashed_password)


def needs_update(hashed_password: str) -> bool:
    """Check if password hash needs updating."""
    return _default_hasher.needs_update(hashed_password)
