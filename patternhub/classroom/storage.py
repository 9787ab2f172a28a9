"""
Progress storage - Persist the learner's UserProgress record.

The record is one JSON document under a fixed key, written whole on every
save (last write wins). Loading never fails: a missing or unreadable record
yields a fresh UserProgress.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from patternhub.config import DEFAULT_PROGRESS_DB, PROGRESS_STORAGE_KEY
from patternhub.schemas import UserProgress


logger = logging.getLogger(__name__)


class ProgressStorage:
    """
    Base persistence adapter: load()/save() over a raw key/value record.

    Subclasses implement read_raw(), write_raw() and clear().
    """

    def __init__(self, key: str = PROGRESS_STORAGE_KEY):
        self.key = key

    def read_raw(self) -> Optional[str]:
        raise NotImplementedError

    def write_raw(self, value: str):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError

    def load(self) -> UserProgress:
        """Load the stored record, or defaults if it is absent or corrupt."""
        try:
            payload = self.read_raw()
        except UnicodeDecodeError:
            logger.warning(f"Discarding unreadable progress record {self.key!r}: not valid UTF-8")
            return UserProgress()
        if payload is None:
            return UserProgress()
        try:
            return UserProgress.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(
                f"Discarding unreadable progress record {self.key!r}: "
                f"{e.error_count()} validation error(s)"
            )
            return UserProgress()

    def save(self, progress: UserProgress):
        """Replace the stored record with this snapshot."""
        self.write_raw(progress.to_json())


class InMemoryProgressStorage(ProgressStorage):
    """Dictionary-backed storage for tests and throwaway sessions."""

    def __init__(self, key: str = PROGRESS_STORAGE_KEY, initial: Optional[str] = None):
        super().__init__(key)
        self._items: dict[str, str] = {}
        self.write_count = 0
        if initial is not None:
            self._items[key] = initial

    def read_raw(self) -> Optional[str]:
        return self._items.get(self.key)

    def write_raw(self, value: str):
        self._items[self.key] = value
        self.write_count += 1

    def clear(self):
        self._items.pop(self.key, None)


class SqliteProgressStorage(ProgressStorage):
    """
    Store the progress record in ~/.patternhub/progress.db.

    A single key/value table plays the role of browser local storage, so
    other records can share the file without touching this one.
    """

    def __init__(self, db_path: Optional[Path] = None, key: str = PROGRESS_STORAGE_KEY):
        """
        Initialize storage.

        Args:
            db_path: Path to progress.db (default: ~/.patternhub/progress.db)
            key: Record key
        """
        super().__init__(key)
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS local_storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def read_raw(self) -> Optional[str]:
        """
        Read the raw record.

        Raises:
            UnicodeDecodeError: If the stored bytes are not valid UTF-8
        """
        conn = self._get_connection()
        try:
            # Read bytes so a badly encoded value surfaces as a decode error
            cursor = conn.execute(
                "SELECT CAST(value AS BLOB) AS value FROM local_storage WHERE key = ?",
                (self.key,)
            )
            row = cursor.fetchone()
            return row["value"].decode("utf-8") if row else None
        finally:
            conn.close()

    def write_raw(self, value: str):
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO local_storage (key, value, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET
                     value = excluded.value,
                     updated_at = excluded.updated_at""",
                (self.key, value, now)
            )
            conn.commit()
        finally:
            conn.close()

    def clear(self):
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM local_storage WHERE key = ?", (self.key,))
            conn.commit()
        finally:
            conn.close()
