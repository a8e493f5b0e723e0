#!/usr/bin/env python3
"""
Database Reset Script
Reset the lab booking database structure

Features:
1. Drop all tables - wipe accounts and reservations
2. Recreate tables - create the latest schema from the table models

Notes:
- This script only resets database structure, does not seed test data
- To seed demo accounts, run `python script/seed_data.py`
"""

import asyncio

from sqlalchemy.engine import make_url

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Base, Database
import src.service.lab_booking.driven_adapter.model  # noqa: F401


async def drop_and_recreate_tables(database: Database) -> None:
    """Drop every table model and create it again"""
    async with database.engine.begin() as conn:
        print('🗑️  Dropping tables...')
        await conn.run_sync(Base.metadata.drop_all)
        print('🏗️  Creating tables...')
        await conn.run_sync(Base.metadata.create_all)

    for table in Base.metadata.sorted_tables:
        print(f'   ✅ {table.name}')


async def main():
    print('🔄 Starting database reset...')
    print('=' * 50)
    print(f'Database: {make_url(settings.DATABASE_URL).render_as_string(hide_password=True)}')

    database = Database(database_url=settings.DATABASE_URL)
    try:
        await drop_and_recreate_tables(database)

        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed demo accounts, run: python script/seed_data.py')

    except Exception as e:
        print(f'❌ Reset failed: {e}')
        exit(1)

    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
