"""
Create the SQLite schema and seed the default categories.

Safe to run repeatedly: tables are created IF NOT EXISTS and seeding skips
names that already exist.
"""
from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Union

from taskmind.config import load_settings
from taskmind.infra.db.repo.storage_sqlite import SqliteStorage

logger = logging.getLogger(__name__)


async def prepare_database(path: Union[str, Path]) -> SqliteStorage:
    os.makedirs(os.path.dirname(str(path)) or ".", exist_ok=True)
    storage = SqliteStorage(str(path))
    await storage.init()
    await storage.seed_default_categories()
    return storage


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    )
    try:
        settings = load_settings()
        logger.info("Setting up database at %s", settings.database_path)
        asyncio.run(prepare_database(settings.database_path))
        logger.info("Database setup complete")
    except Exception:
        logger.error("Database setup failed", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
