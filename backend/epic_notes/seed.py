"""
Epic Notes Backend: Development Seed Data
============================================

What:  Creates the tables and a demo user with a few notes.
How:   python -m epic_notes.seed [--reset]

    --reset  drops every table first, discarding existing data

Afterwards the edit page of the first note is at
/users/kody/notes/d27a197e/edit.
"""

import argparse
import asyncio
import logging

from sqlalchemy import select

from epic_notes.database import async_session_factory, create_tables, dispose_engine, drop_tables
from epic_notes.models import Note, User

logger = logging.getLogger(__name__)

DEMO_USERNAME = "kody"

DEMO_NOTES = [
    {
        "id": "d27a197e",
        "title": "Basic Koala Facts",
        "content": "Koalas are found in the eucalyptus forests of eastern Australia. "
                   "They have grey fur with a cream-coloured chest, and strong, clawed "
                   "feet, perfect for living in the branches of trees!",
    },
    {
        "id": "414f0c09",
        "title": "Koalas like to cuddle",
        "content": "Cuddly critters, koalas measure about 60cm to 85cm long, and weigh "
                   "about 14kg.",
    },
    {
        "id": "260366b1",
        "title": "Not bears",
        "content": "Although you may have heard people call them koala 'bears', these "
                   "awesome animals aren't bears at all - they are in fact marsupials.",
    },
]


async def seed(reset: bool = False) -> int:
    """
    Insert the demo user and notes that are not already present.

    Returns:
        Number of notes inserted.
    """
    if reset:
        logger.warning("Dropping all tables...")
        await drop_tables()
    await create_tables()

    inserted = 0
    async with async_session_factory() as session:
        result = await session.execute(select(User).where(User.username == DEMO_USERNAME))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(username=DEMO_USERNAME, name="Kody")
            session.add(user)
            await session.flush()
            logger.info("Created user %s", DEMO_USERNAME)

        for data in DEMO_NOTES:
            if await session.get(Note, data["id"]) is not None:
                continue
            session.add(Note(owner_id=user.id, **data))
            inserted += 1

        await session.commit()

    logger.info("Seeded %d note(s) for %s", inserted, DEMO_USERNAME)
    return inserted


async def _main(reset: bool) -> None:
    try:
        await seed(reset=reset)
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the Epic Notes database with demo data.")
    parser.add_argument("--reset", action="store_true", help="drop all tables before seeding")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(_main(args.reset))


if __name__ == "__main__":
    main()
