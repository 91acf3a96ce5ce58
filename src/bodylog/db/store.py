"""Structured record access over SQLite.

Services read and write rows through ``RecordStore`` using table names and
column mappings instead of raw SQL. Only tables and columns declared in
``TABLE_COLUMNS`` are accepted, and keyed lookups must use a key declared in
``UNIQUE_KEYS``.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

import aiosqlite

from ..errors import StoreFailure
from .engine import get_db_path

logger = logging.getLogger(__name__)

TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "users_profile": (
        "id", "weight", "height", "weight_unit", "created_at", "updated_at",
    ),
    "weight_logs": (
        "id", "user_id", "date_logged", "weight", "weight_unit",
        "created_at", "updated_at",
    ),
    "calculator_sessions": (
        "id", "user_id", "category", "date", "inputs", "result",
        "result_unit", "created_at",
    ),
}

UNIQUE_KEYS: dict[str, tuple[frozenset[str], ...]] = {
    "users_profile": (frozenset({"id"}),),
    "weight_logs": (frozenset({"id"}), frozenset({"user_id", "date_logged"})),
    "calculator_sessions": (frozenset({"id"}),),
}

# Tables with an updated_at column bumped on every update
_TOUCHED_TABLES = {"users_profile", "weight_logs"}


class RecordStore:
    """Generic create/read/upsert access to the bodylog tables."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @asynccontextmanager
    async def _connect(self):
        """Open a connection, translating driver errors into StoreFailure."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except aiosqlite.Error as e:
            logger.error("Store call failed on %s: %s", self.db_path, e)
            raise StoreFailure("The metrics store is unavailable") from e

    async def find_unique(self, table: str, key: dict) -> dict | None:
        """Get the single row matching a declared unique key."""
        self._check_unique_key(table, key)
        where_sql, params = self._where(table, key)
        async with self._connect() as db:
            cursor = await db.execute(
                f"SELECT * FROM {table}{where_sql} LIMIT 1", params
            )
            row = await cursor.fetchone()
            return dict(row) if row is not None else None

    async def find_first(
        self,
        table: str,
        where: dict,
        order_by: str | None = None,
        descending: bool = True,
    ) -> dict | None:
        """Get the first row matching an equality filter."""
        rows = await self.find_many(
            table, where, order_by=order_by, descending=descending, limit=1
        )
        return rows[0] if rows else None

    async def find_many(
        self,
        table: str,
        where: dict,
        order_by: str | None = None,
        descending: bool = True,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict]:
        """List rows matching an equality filter."""
        where_sql, params = self._where(table, where)
        sql = f"SELECT * FROM {table}{where_sql}"
        if order_by is not None:
            self._check_columns(table, [order_by])
            direction = "DESC" if descending else "ASC"
            # created_at breaks ties between rows sharing a date
            sql += f" ORDER BY {order_by} {direction}, created_at {direction}"
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params = (*params, limit, offset)
        async with self._connect() as db:
            cursor = await db.execute(sql, params)
            rows = await cursor.fetchall()
            return [dict(row) for row in rows]

    async def count(self, table: str, where: dict) -> int:
        """Count rows matching an equality filter."""
        where_sql, params = self._where(table, where)
        async with self._connect() as db:
            cursor = await db.execute(
                f"SELECT COUNT(*) FROM {table}{where_sql}", params
            )
            row = await cursor.fetchone()
            return row[0]

    async def create(self, table: str, fields: dict) -> dict:
        """Insert a new row and return its stored values."""
        values = {"id": str(uuid4()), **fields}
        self._check_columns(table, values)
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        async with self._connect() as db:
            await db.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                tuple(values.values()),
            )
            await db.commit()
        return values

    async def upsert(self, table: str, key: dict, create: dict, update: dict) -> dict:
        """Create the row for ``key`` or update it in a single statement.

        Relies on SQLite's ``INSERT ... ON CONFLICT DO UPDATE``, so concurrent
        calls for the same key never create duplicates and each call applies
        its update fields as a whole.
        """
        self._check_unique_key(table, key)
        if not update:
            raise ValueError("upsert requires at least one update field")
        self._check_columns(table, update)

        values = {**create, **key}
        if "id" not in values:
            values["id"] = str(uuid4())
        self._check_columns(table, values)

        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        conflict = ", ".join(sorted(key))
        assignments = [f"{column} = ?" for column in update]
        if table in _TOUCHED_TABLES:
            assignments.append("updated_at = CURRENT_TIMESTAMP")
        where_sql, key_params = self._where(table, key)

        async with self._connect() as db:
            await db.execute(
                f"""
                INSERT INTO {table} ({columns}) VALUES ({placeholders})
                ON CONFLICT ({conflict}) DO UPDATE SET {", ".join(assignments)}
                """,
                (*values.values(), *update.values()),
            )
            await db.commit()
            cursor = await db.execute(
                f"SELECT * FROM {table}{where_sql} LIMIT 1", key_params
            )
            row = await cursor.fetchone()
            return dict(row)

    def _check_columns(self, table: str, columns) -> None:
        """Reject unknown tables and columns."""
        if table not in TABLE_COLUMNS:
            raise ValueError(f"Unknown table: {table}")
        unknown = [c for c in columns if c not in TABLE_COLUMNS[table]]
        if unknown:
            raise ValueError(f"Unknown column(s) for {table}: {', '.join(unknown)}")

    def _check_unique_key(self, table: str, key: dict) -> None:
        """Reject lookups that are not on a declared unique key."""
        self._check_columns(table, key)
        if frozenset(key) not in UNIQUE_KEYS[table]:
            raise ValueError(f"{sorted(key)} is not a unique key of {table}")

    def _where(self, table: str, where: dict) -> tuple[str, tuple]:
        """Build an equality WHERE clause."""
        self._check_columns(table, where)
        if not where:
            return "", ()
        clause = " AND ".join(f"{column} = ?" for column in where)
        return f" WHERE {clause}", tuple(where.values())
