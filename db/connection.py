from __future__ import annotations

import sqlite3
from typing import Optional

from errors import StorageError


def get_connection(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Open (or create) the SQLite store file.

    - WAL journal for fewer writer blocks
    - NORMAL synchronous for performance
    """
    try:
        conn = sqlite3.connect(db_path, timeout=timeout or 30.0)
    except sqlite3.Error as e:
        raise StorageError(f"cannot open {db_path}: {e}") from e
    try:
        # Pragmas
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
    except sqlite3.Error as e:
        conn.close()
        raise StorageError(f"cannot open {db_path}: {e}") from e
    return conn
