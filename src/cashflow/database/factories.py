"""Build a Database from the configured storage location."""

import logging
import os
from pathlib import Path
from typing import Optional

from cashflow.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "CASHFLOW_DB_PATH"
DEFAULT_DB_PATH = "~/.cashflow/cashflow.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file to use.

    Precedence: the explicit argument, then CASHFLOW_DB_PATH, then
    ~/.cashflow/cashflow.db. Empty values count as unset. A leading ``~`` is
    expanded and a missing parent directory is created.
    """
    raw = database_path or os.environ.get(DB_PATH_ENV) or DEFAULT_DB_PATH
    path = Path(raw).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLAlchemyDatabase backed by the resolved SQLite file."""
    path = resolve_database_path(database_path)
    logger.debug("Using SQLite database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
