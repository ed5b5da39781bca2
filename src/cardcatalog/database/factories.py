"""Store factory functions for creating store instances."""

import os
from pathlib import Path
from typing import Optional

from cardcatalog.database.sqlalchemy_db import SQLAlchemyKeyValueStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyKeyValueStore:
    """Create a SQLite-backed key-value store.

    Args:
        database_path: Path to SQLite database file. If None, checks
            CARDCATALOG_DB_PATH environment variable, then defaults to
            ~/.cardcatalog/catalog.db

    Returns:
        SQLAlchemyKeyValueStore instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("CARDCATALOG_DB_PATH")

    if database_path is None:
        # Default to ~/.cardcatalog/catalog.db
        home = Path.home()
        db_dir = home / ".cardcatalog"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "catalog.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyKeyValueStore(database_url)
