"""Seed the database with the default categories and a demo user.

Usage:
    python seed_db.py [--title "Extra Category" ...]
"""

import argparse
import asyncio
import logging

from sqlalchemy import select

import ideabox.models  # noqa: F401
from ideabox.database import Base, async_session, engine
from ideabox.errors import CategoryValidationError
from ideabox.models.user import User
from ideabox.services.ideas import create_category

logger = logging.getLogger("seed_db")

DEFAULT_CATEGORIES = ["Product", "Engineering", "Community", "Wild Ideas"]
DEMO_EMAIL = "demo@example.com"


async def seed(titles):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        for title in titles:
            try:
                await create_category(session, title)
            except CategoryValidationError as e:
                logger.info("Skipping %s: %s", title, e.message)

        existing = await session.execute(select(User).where(User.email == DEMO_EMAIL))
        user = existing.scalar_one_or_none()
        if not user:
            user = User(email=DEMO_EMAIL, full_name="Demo User")
            session.add(user)
            await session.flush()
            logger.info("Created demo user %s (sign in at /dev-login/%s)", user.email, user.id)

        await session.commit()
    await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--title", action="append", default=[], help="extra category title")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(seed(DEFAULT_CATEGORIES + args.title))
    print("Database seeded successfully.")


if __name__ == "__main__":
    main()
