"""
Seed the database with a demo user and a few sample notes.

Usage: ``python -m notekeep.seed``. Running it twice leaves a single demo
user; notes are only added when the demo user has none.
"""
import asyncio
from typing import Optional

from .config import Settings, get_settings
from .core.logging import get_logger, setup_logging
from .core.repositories import NoteRepository, UserRepository
from .database import Database
from .security.password_policy import PasswordPolicy

logger = get_logger("seed")

DEMO_EMAIL = "demo@example.com"
DEMO_USERNAME = "demouser"
DEMO_PASSWORD = "DemoUser123!"

SAMPLE_NOTES = [
    (
        "Welcome to Your Notes App",
        "This is your first note! Create, edit and delete notes to organize your thoughts.",
    ),
    (
        "Project Ideas",
        "- Task manager with a REST backend\n- Personal blog\n- Weather dashboard\n- Expense tracker",
    ),
    (
        "Learning Goals",
        "1. Async Python in depth\n2. Docker and containers\n3. System design principles",
    ),
    (
        "Recipe: Homemade Pizza",
        "Flour, water, yeast, salt, olive oil. Knead, let rise for an hour, bake hot.",
    ),
    (
        "Book Recommendations",
        "Clean Code; The Pragmatic Programmer; Designing Data-Intensive Applications",
    ),
]


async def seed(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    database = Database.from_settings(settings)
    passwords = PasswordPolicy.from_settings(settings)

    try:
        await database.create_tables()
        async with database.session_factory() as session:
            users = UserRepository(session)
            notes = NoteRepository(session)

            user = await users.get_by_email(DEMO_EMAIL)
            if user is None:
                user = await users.create_user(
                    DEMO_EMAIL, DEMO_USERNAME, await passwords.hash_async(DEMO_PASSWORD)
                )
                logger.info(f"Demo user created: {user.email}")
            else:
                logger.info(f"Demo user already present: {user.email}")

            _, total = await notes.list_user_notes(user.id, offset=0, limit=1)
            if total:
                logger.info(f"Demo user already has {total} notes, skipping")
                return

            for title, content in SAMPLE_NOTES:
                await notes.create_note(owner_id=user.id, title=title, content=content)
            logger.info(f"Created {len(SAMPLE_NOTES)} sample notes")
    finally:
        await database.dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    asyncio.run(seed(settings))


if __name__ == "__main__":
    main()
