"""
Noteful API — Seed / Fixture Loader
====================================

What:  Resets the schema and loads a known sample data set.
Why:   Every API test starts from the same rows; developers get a populated
       database with one command.
How:   Drops and recreates all tables from the ORM metadata, then inserts the
       sample rows with explicit ids in a single transaction.
Who:   tests/conftest.py (before each test) and `python -m noteful.seed`.

Sample data:
    4 folders (100-103), 4 tags (1-4), 10 notes (1000-1009) of which four
    have "about cats" in the title, and a handful of note/tag associations.
    After loading, the next generated note id is 1010 on every supported store.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy import insert, text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from noteful.database import Base, Database
from noteful.models import Folder, Note, Tag, notes_tags

logger = logging.getLogger(__name__)

SEED_FOLDERS = [
    {"id": 100, "name": "Archive"},
    {"id": 101, "name": "Drafts"},
    {"id": 102, "name": "Personal"},
    {"id": 103, "name": "Work"},
]

SEED_TAGS = [
    {"id": 1, "name": "foo"},
    {"id": 2, "name": "bar"},
    {"id": 3, "name": "baz"},
    {"id": 4, "name": "qux"},
]

_LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua."
)

SEED_NOTES = [
    {"id": 1000, "title": "5 life lessons learned from cats", "content": _LOREM, "folder_id": 100},
    {"id": 1001, "title": "What the government doesn't want you to know about cats", "content": _LOREM, "folder_id": 101},
    {"id": 1002, "title": "The most boring article about cats you'll ever read", "content": _LOREM, "folder_id": 101},
    {"id": 1003, "title": "7 things lady gaga has in common with cats", "content": _LOREM, "folder_id": 102},
    {"id": 1004, "title": "The most incredible article about cats you'll ever read", "content": _LOREM, "folder_id": 103},
    {"id": 1005, "title": "10 ways cats can help you live to 100", "content": _LOREM, "folder_id": 103},
    {"id": 1006, "title": "9 reasons you can blame the recession on cats", "content": _LOREM, "folder_id": None},
    {"id": 1007, "title": "10 ways marketers are making you addicted to cats", "content": _LOREM, "folder_id": 100},
    {"id": 1008, "title": "11 ways investing in cats can make you a millionaire", "content": _LOREM, "folder_id": 102},
    {"id": 1009, "title": "Why you should forget everything you learned about cats", "content": _LOREM, "folder_id": None},
]

SEED_NOTES_TAGS = [
    {"note_id": 1000, "tag_id": 1},
    {"note_id": 1000, "tag_id": 2},
    {"note_id": 1001, "tag_id": 2},
    {"note_id": 1002, "tag_id": 3},
    {"note_id": 1005, "tag_id": 1},
    {"note_id": 1005, "tag_id": 4},
]

# Tables whose serial sequence must be moved past the explicit seed ids
_SEQUENCED_TABLES = ("folders", "tags", "notes")


async def reset_schema(engine: AsyncEngine) -> None:
    """Drop every table known to the ORM metadata and create them again."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _sync_sequences(conn: AsyncConnection) -> None:
    # PostgreSQL serials do not notice explicit ids; SQLite uses max(rowid) + 1
    for table in _SEQUENCED_TABLES:
        await conn.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"(SELECT MAX(id) FROM {table}))"
            )
        )


async def load_fixtures(engine: AsyncEngine) -> None:
    """Insert the sample data set into freshly created tables."""
    async with engine.begin() as conn:
        await conn.execute(insert(Folder), SEED_FOLDERS)
        await conn.execute(insert(Tag), SEED_TAGS)
        await conn.execute(insert(Note), SEED_NOTES)
        await conn.execute(insert(notes_tags), SEED_NOTES_TAGS)
        if engine.dialect.name == "postgresql":
            await _sync_sequences(conn)

    logger.info(
        "Loaded %d folders, %d tags, %d notes",
        len(SEED_FOLDERS),
        len(SEED_TAGS),
        len(SEED_NOTES),
    )


async def seed_database(database: Database) -> None:
    await reset_schema(database.engine)
    await load_fixtures(database.engine)


async def _main(database: Optional[Database] = None) -> None:
    database = database or Database.from_settings()
    try:
        await seed_database(database)
    finally:
        await database.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(_main())
