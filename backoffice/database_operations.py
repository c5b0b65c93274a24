from typing import Any

import asyncpg

from backoffice.db_context import DatabaseManager


class DatabaseOperations:
    """Composition class for database operations.

    Every call runs on the connection the repository scoped with
    `DatabaseManager.connection()`; rows come back as plain dicts.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    def get_connection(self) -> asyncpg.Connection:
        conn = self.db.get_current_connection()
        if not conn:
            raise RuntimeError(
                "No connection in context. Wrap the call in `async with db.connection()`."
            )
        return conn

    async def fetch_all(self, query: str, params: list[Any]) -> list[dict[str, Any]]:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        rows = await conn.fetch(query, *params)
        return [dict(row) for row in rows]

    async def fetch_one(self, query: str, params: list[Any]) -> dict[str, Any] | None:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        row = await conn.fetchrow(query, *params)
        return dict(row) if row is not None else None

    async def fetch_value(self, query: str, params: list[Any]) -> Any:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        return await conn.fetchval(query, *params)

    async def execute_query(self, query: str, params: list[Any]) -> str:
        """Execute a statement and return the driver's command tag"""
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        return await conn.execute(query, *params)
