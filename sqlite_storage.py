"""
SQLite storage for scraped records.

Saves batches of untyped records (column name -> str/int/float) into a
single table. The table schema is taken from an explicit column mapping when
one is given, otherwise inferred from the first record of the batch, and is
fixed for the life of the table.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
import logging
import sqlite3

from errors import SchemaInferenceError, StorageError


logger = logging.getLogger(__name__)


def _quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def column_type(value: Any) -> str:
    """Map a Python scalar to its SQLite column type."""
    # bool is an int subclass but has no column type of its own
    if isinstance(value, bool):
        raise SchemaInferenceError(f"unknown type: {type(value).__name__}")
    if isinstance(value, str):
        return "TEXT"
    if isinstance(value, int):
        return "INTEGER"
    if isinstance(value, float):
        return "REAL"
    raise SchemaInferenceError(f"unknown type: {type(value).__name__}")


def infer_schema(record: Dict[str, Any]) -> Dict[str, str]:
    return {key: column_type(value) for key, value in record.items()}


def _order_columns(keys: Sequence[str], schema: Dict[str, str]) -> List[str]:
    # Key columns lead, the rest keep the schema's order
    leading = [k for k in keys if k in schema]
    return leading + [c for c in schema if c not in leading]


def _check_record(schema: Dict[str, str], record: Dict[str, Any], index: int) -> None:
    if set(record) != set(schema):
        raise SchemaInferenceError(
            f"record {index} has columns {sorted(record)}, expected {sorted(schema)}"
        )
    for key, value in record.items():
        actual = column_type(value)
        if actual != schema[key]:
            raise SchemaInferenceError(
                f"record {index} column {key!r} is {actual}, expected {schema[key]}"
            )


class SQLiteStorage:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        try:
            return self.conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StorageError(f"{e}: {sql}") from e

    def _commit(self) -> None:
        try:
            self.conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"commit failed: {e}") from e

    def table_exists(self, table_name: str) -> bool:
        cur = self._execute(
            "SELECT count(name) FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        row = cur.fetchone()
        return bool(row) and row[0] == 1

    def create_table(self, keys: Sequence[str], schema: Dict[str, str], table_name: str) -> None:
        """Create the table, then clear it so a fresh table and a refreshed one start alike."""
        table = _quote_ident(table_name)
        columns = ", ".join(
            f"{_quote_ident(col)} {schema[col]}" for col in _order_columns(keys, schema)
        )
        self._execute(f"CREATE TABLE {table} ({columns})")
        self._execute(f"DELETE FROM {table}")
        self._commit()
        logger.info(f"Created table {table_name}", extra={"step": "storage", "status": "created"})

    def clear_table(self, table_name: str) -> None:
        self._execute(f"DELETE FROM {_quote_ident(table_name)}")
        self._commit()

    def insert_record(self, table_name: str, record: Dict[str, Any]) -> None:
        for value in record.values():
            column_type(value)
        columns = ", ".join(_quote_ident(k) for k in record)
        placeholders = ", ".join("?" for _ in record)
        self._execute(
            f"INSERT INTO {_quote_ident(table_name)} ({columns}) VALUES ({placeholders})",
            tuple(record.values()),
        )
        # Each insert stands alone; a later failure keeps earlier rows
        self._commit()

    def save(
        self,
        keys: Sequence[str],
        data: List[Dict[str, Any]],
        table_name: str,
        schema: Optional[Dict[str, str]] = None,
        refresh: bool = False,
    ) -> int:
        """Save ``data`` into ``table_name`` and return the number of rows inserted.

        ``keys`` only orders the leading columns of a new table; there is no
        upsert. An existing table keeps its rows unless ``refresh`` is set.
        """
        if not data:
            return 0
        if schema is not None:
            for index, record in enumerate(data):
                _check_record(schema, record, index)

        if not self.table_exists(table_name):
            self.create_table(keys, schema or infer_schema(data[0]), table_name)
        elif refresh:
            logger.info(f"Clearing existing rows from {table_name}", extra={"step": "storage", "status": "refresh"})
            self.clear_table(table_name)

        inserted = 0
        for record in data:
            self.insert_record(table_name, record)
            inserted += 1
        return inserted

    def count_rows(self, table_name: str) -> int:
        cur = self._execute(f"SELECT COUNT(*) FROM {_quote_ident(table_name)}")
        return int(cur.fetchone()[0])

    def fetch_rows(self, table_name: str, limit: int = 5) -> List[Dict[str, Any]]:
        cur = self._execute(f"SELECT * FROM {_quote_ident(table_name)} ORDER BY rowid LIMIT ?", (limit,))
        names = [d[0] for d in cur.description]
        return [{key: row[idx] for idx, key in enumerate(names)} for row in cur.fetchall()]
