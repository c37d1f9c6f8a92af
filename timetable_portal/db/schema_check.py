import asyncio
from typing import List

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine

import timetable_portal.auth.models  # noqa: F401  (register tables on Base.metadata)
import timetable_portal.core.models  # noqa: F401
from timetable_portal.db.session import Base, engine


# Columns added after the first release; create_all does not alter existing tables
ALTER_SUBJECTS_SPLIT_STUDENTS: str = """
    ALTER TABLE subjects ADD COLUMN IF NOT EXISTS split_students BOOLEAN NOT NULL DEFAULT FALSE;
"""

ALTER_SUBJECTS_NUM_BATCHES: str = """
    ALTER TABLE subjects ADD COLUMN IF NOT EXISTS num_batches INTEGER;
"""

ALTER_ANNOUNCEMENTS_DISPLAY_DURATION: str = """
    ALTER TABLE announcements ADD COLUMN IF NOT EXISTS display_duration INTEGER;
"""

ALTER_PROFILES_BATCH: str = """
    DO $$
    BEGIN
        IF NOT EXISTS (
            SELECT 1 FROM information_schema.columns
            WHERE table_name = 'profiles' AND column_name = 'batch'
        ) THEN
            ALTER TABLE profiles ADD COLUMN batch batch_type NOT NULL DEFAULT 'B1';
        END IF;
    END $$;
"""


def _existing_tables(sync_conn) -> List[str]:
    return inspect(sync_conn).get_table_names()


async def ensure_tables(db_engine: AsyncEngine) -> List[str]:
    """
    Ensure every table the app uses exists. Missing tables are created; on
    Postgres, columns added in later releases are added to existing tables.
    Returns the names of the tables that were created.
    """
    async with db_engine.begin() as conn:
        before = set(await conn.run_sync(_existing_tables))
        await conn.run_sync(Base.metadata.create_all)
        after = set(await conn.run_sync(_existing_tables))

        if conn.dialect.name == "postgresql":
            await conn.execute(text(ALTER_SUBJECTS_SPLIT_STUDENTS))
            await conn.execute(text(ALTER_SUBJECTS_NUM_BATCHES))
            await conn.execute(text(ALTER_ANNOUNCEMENTS_DISPLAY_DURATION))
            await conn.execute(text(ALTER_PROFILES_BATCH))

    missing = sorted(after - before)
    if missing:
        print("Created missing tables: " + ", ".join(missing))
    else:
        print("All required tables already exist in the database.")
    return missing


async def main() -> None:
    await ensure_tables(engine)


if __name__ == "__main__":
    asyncio.run(main())
