"""
FILE: protask/core/repository.py
PURPOSE: Durable key-value slots in SQLite, and the task collection load/save
EXPORTS:
  - get_connection() -> Connection
  - init_database(conn) -> None
  - get_string(key) -> str | None
  - set_string(key, value) -> None
  - get_int(key) -> int | None
  - set_int(key, value) -> None
  - delete_slot(key) -> None
  - load_tasks() -> List[Task]
  - save_tasks(tasks) -> None
DEPENDENCIES:
  - sqlite3 (stdlib)
  - pathlib (stdlib)
  - contextlib (stdlib)
  - protask.config (data directory)
  - protask.core.models (encode_tasks, decode_tasks)
  - protask.core.exceptions (PersistenceError, MalformedDocumentError)
NOTES:
  - Database stored at ~/.protask/protask.db (PROTASK_HOME overrides)
  - Auto-creates directory and schema on first connection
  - One row per slot; values are stored as TEXT
  - Every save rewrites the whole collection in one transaction, so a
    failed write leaves the previous document in place
  - Missing slots are not errors: getters return None
"""

import logging
import sqlite3
from contextlib import closing
from typing import List, Optional

from .. import config
from .constants import TASKS_SLOT
from .exceptions import PersistenceError
from .models import Task, encode_tasks, decode_tasks

logger = logging.getLogger(__name__)


# Database file location (cross-platform)
DB_DIR = config.data_dir()
DB_PATH = DB_DIR / "protask.db"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS slots (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def get_connection() -> sqlite3.Connection:
    """
    Get SQLite connection to the ProTask database.

    Creates the data directory if it doesn't exist and initializes the
    schema. Caller is responsible for closing the connection.
    """
    DB_DIR.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row

    init_database(conn)

    return conn


def init_database(conn: sqlite3.Connection) -> None:
    """Create the slots table. Safe to call multiple times."""
    conn.executescript(SCHEMA_SQL)
    conn.commit()


def get_string(key: str) -> Optional[str]:
    """
    Read a string slot.

    Returns:
        Stored value, or None if the slot was never written

    Raises:
        PersistenceError: If the database can't be read
    """
    try:
        with closing(get_connection()) as conn:
            row = conn.execute(
                "SELECT value FROM slots WHERE key = ?", (key,)
            ).fetchone()
    except (sqlite3.Error, OSError) as e:
        raise PersistenceError(f"Could not read slot '{key}': {e}") from e

    return row["value"] if row else None


def set_string(key: str, value: str) -> None:
    """
    Write a string slot, overwriting any previous value.

    Raises:
        PersistenceError: If the write fails (previous value is kept)
    """
    try:
        with closing(get_connection()) as conn:
            # Connection context manager commits on success, rolls back on error
            with conn:
                conn.execute(
                    "INSERT INTO slots (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
    except (sqlite3.Error, OSError) as e:
        raise PersistenceError(f"Could not write slot '{key}': {e}") from e


def get_int(key: str) -> Optional[int]:
    """Read an integer slot. Non-numeric content reads as absent."""
    raw = get_string(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Slot %r holds non-integer value %r, ignoring", key, raw)
        return None


def set_int(key: str, value: int) -> None:
    set_string(key, str(int(value)))


def delete_slot(key: str) -> None:
    """Remove a slot. Deleting a missing slot is a no-op."""
    try:
        with closing(get_connection()) as conn:
            with conn:
                conn.execute("DELETE FROM slots WHERE key = ?", (key,))
    except (sqlite3.Error, OSError) as e:
        raise PersistenceError(f"Could not delete slot '{key}': {e}") from e


# --- Task Collection ---


def load_tasks() -> List[Task]:
    """
    Load the task collection.

    Returns:
        Decoded tasks in stored order, or [] if nothing was ever saved

    Raises:
        MalformedDocumentError: If the stored document can't be decoded
        PersistenceError: If the database can't be read
    """
    document = get_string(TASKS_SLOT)
    if document is None:
        logger.debug("No stored tasks, starting empty")
        return []

    tasks = decode_tasks(document)
    logger.debug("Loaded %d task(s)", len(tasks))
    return tasks


def save_tasks(tasks: List[Task]) -> None:
    """
    Save the full task collection, replacing the stored document.

    Raises:
        PersistenceError: If the write fails
    """
    set_string(TASKS_SLOT, encode_tasks(tasks))
    logger.debug("Saved %d task(s)", len(tasks))
