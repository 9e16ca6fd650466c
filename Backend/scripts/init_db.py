#!/usr/bin/env python3
"""
Initialize the contacts schema using SQLAlchemy models.

Safe to run multiple times (idempotent). The app also does this on startup.

Usage:
    export DATABASE_URL="sqlite+aiosqlite:///./data/ridebook.db"
    python3 Backend/scripts/init_db.py
"""
import asyncio
import logging
import sys
from pathlib import Path

# Add Backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ridebook.core.config import get_settings
from ridebook.core.db import engine, init_db

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


async def main():
    logger.info(f"Initializing database: {get_settings().database_url}")
    try:
        await init_db()
    finally:
        await engine.dispose()
    logger.info("Tables ready: contacts")


if __name__ == "__main__":
    asyncio.run(main())
