#!/usr/bin/env python3
"""Run database migrations before deploying the API and workers.

Runs Alembic to head, then checks that the alert tables exist.
Safe to run multiple times (idempotent).
"""

import asyncio
import os
import sys
import traceback

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from alembic import command
from alembic.config import Config
from sqlalchemy import text

from app.price_alerts.infrastructure.db.session import dispose_engine, get_async_session_local

REQUIRED_TABLES = ("stock_alerts", "users")


def run_migrations() -> bool:
    """Run Alembic migrations."""
    print("Running database migrations...")

    # alembic.ini lives in the backend directory
    alembic_cfg = Config(
        os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "alembic.ini")
    )

    try:
        command.upgrade(alembic_cfg, "head")
        print("Migrations completed successfully")
        return True
    except Exception as e:
        print(f"Migration error: {e}")
        traceback.print_exc()
        return False


async def check_tables() -> bool:
    """Check that every table the alert pipeline reads exists."""
    session_factory = get_async_session_local()
    try:
        async with session_factory() as session:
            result = await session.execute(
                text("SELECT tablename FROM pg_tables WHERE schemaname='public'")
            )
            tables = {row[0] for row in result.fetchall()}
    finally:
        await dispose_engine()

    missing = [table for table in REQUIRED_TABLES if table not in tables]
    for table in REQUIRED_TABLES:
        print(f"   - {table}: {'missing' if table in missing else 'ok'}")
    return not missing


if __name__ == "__main__":
    if not run_migrations():
        print("Migrations failed. Check errors above.")
        sys.exit(1)

    if not asyncio.run(check_tables()):
        print("Migrations ran but alert tables are missing. Check logs above.")
        sys.exit(1)

    print("Database is ready")
