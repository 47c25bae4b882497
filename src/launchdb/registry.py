from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Union

from launchdb.errors import StoreUnavailable
from launchdb.paths import DESKTOP_SUFFIX

logger = logging.getLogger(__name__)

_SCHEMA = "CREATE TABLE IF NOT EXISTS applications(path TEXT PRIMARY KEY)"


def _listed_as_desktop(path: str) -> bool:
    # Same rule as SQL `LIKE '%.desktop'`: ASCII case-insensitive.
    return path.lower().endswith(DESKTOP_SUFFIX)


class Registry:
    """
    Persistent set of canonical application paths.

    Layout:
      <database_path>                     -> SQLite file
      applications(path TEXT PRIMARY KEY) -> one row per known application

    Every mutating call commits before returning. Failures are reported as
    booleans; only opening the store (or using a closed one) raises
    StoreUnavailable.
    """

    def __init__(self, database_path: Union[str, Path]) -> None:
        self.database_path = str(database_path)
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "Registry":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "Registry":
        if self._conn is not None:
            return self
        if self.database_path != ":memory:":
            parent = Path(self.database_path).parent
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreUnavailable(f"cannot create {parent}: {e}") from e
        conn: Optional[sqlite3.Connection] = None
        try:
            conn = sqlite3.connect(self.database_path)
            conn.execute(_SCHEMA)
            conn.commit()
        except sqlite3.Error as e:
            if conn is not None:
                conn.close()
            raise StoreUnavailable(f"connection with database {self.database_path} failed: {e}") from e
        self._conn = conn
        logger.debug("opened launch database %s", self.database_path)
        return self

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.debug("closed launch database %s", self.database_path)

    def require_open(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreUnavailable(f"database {self.database_path} is not open")
        return self._conn

    def _write(self, sql: str, params: tuple = ()) -> Optional[int]:
        # Returns the affected row count, or None if the store rejected the write.
        conn = self.require_open()
        try:
            with conn:
                cur = conn.execute(sql, params)
        except sqlite3.IntegrityError:
            return None
        except sqlite3.Error as e:
            logger.warning("write failed (%s): %s", sql, e)
            return None
        return cur.rowcount

    def add(self, path: str) -> bool:
        if not path:
            logger.debug("add application failed: path cannot be empty")
            return False
        # A primary-key conflict means the path is already registered; the
        # insert is reported as failed but the set is unchanged.
        return self._write("INSERT INTO applications (path) VALUES (?)", (path,)) is not None

    def remove(self, path: str) -> bool:
        if not self.exists(path):
            return False
        n = self._write("DELETE FROM applications WHERE path = ?", (path,))
        if n is None:
            logger.warning("remove application failed: %s", path)
            return False
        return n > 0

    def exists(self, path: str) -> bool:
        conn = self.require_open()
        try:
            row = conn.execute("SELECT 1 FROM applications WHERE path = ?", (path,)).fetchone()
        except sqlite3.Error as e:
            logger.warning("application exists failed: %s", e)
            return False
        return row is not None

    def count(self) -> int:
        conn = self.require_open()
        try:
            row = conn.execute("SELECT COUNT(*) FROM applications").fetchone()
        except sqlite3.Error as e:
            logger.warning("count failed: %s", e)
            return 0
        return int(row[0]) if row else 0

    def list_all(self) -> List[str]:
        """
        All registered paths, desktop entries last.

        Desktop-entry files are last-resort candidates, so they sort after
        every other path. Within each group the store's insertion order is kept.
        """
        conn = self.require_open()
        try:
            rows = conn.execute("SELECT path FROM applications ORDER BY rowid").fetchall()
        except sqlite3.Error as e:
            logger.warning("list applications failed: %s", e)
            return []
        paths = [r[0] for r in rows]
        native = [p for p in paths if not _listed_as_desktop(p)]
        desktop = [p for p in paths if _listed_as_desktop(p)]
        return native + desktop

    def remove_all(self) -> bool:
        n = self._write("DELETE FROM applications")
        if n is None:
            logger.warning("remove all applications failed")
            return False
        return True
