import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import asyncpg

from backoffice.config import Settings
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class QueryLog:
    """Represents a logged query"""

    query: str
    params: list[Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    stack_trace: str | None = None


class QueryTracker:
    """Tracks queries executed during a context"""

    def __init__(self):
        self.queries: list[QueryLog] = []
        self._enabled: bool = False

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def log_query(self, query: str, params: list[Any], stack_trace: str | None = None):
        if self._enabled:
            self.queries.append(
                QueryLog(query=query, params=params, stack_trace=stack_trace)
            )

    def get_queries(self) -> list[QueryLog]:
        return self.queries.copy()

    def clear(self):
        self.queries.clear()

    def count(self) -> int:
        return len(self.queries)

    def to_dict(self) -> list[dict[str, Any]]:
        return [
            {
                "query": log.query,
                "params": log.params,
                "timestamp": log.timestamp.isoformat(),
                "stack_trace": log.stack_trace,
            }
            for log in self.queries
        ]


_query_tracker: ContextVar[QueryTracker | None] = ContextVar(
    "query_tracker", default=None
)


class DatabaseManager:
    """Owns one asyncpg pool and scopes connections to the current task.

    Construct it explicitly (or via `connect`) and hand it to repositories;
    there is no module-level pool.
    """

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool
        self._current_connection: ContextVar[asyncpg.Connection | None] = ContextVar(
            f"current_connection_{id(self)}", default=None
        )

    @classmethod
    async def connect(cls, settings: Settings) -> "DatabaseManager":
        """Create the pool described by `settings`."""
        pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )
        logger.info(
            "database pool opened",
            extra={
                "min_size": settings.db_pool_min_size,
                "max_size": settings.db_pool_max_size,
            },
        )
        return cls(pool)

    @property
    def pool(self) -> asyncpg.Pool:
        return self._pool

    async def close(self) -> None:
        await self._pool.close()
        logger.info("database pool closed")

    def get_current_connection(self) -> asyncpg.Connection | None:
        """Get the connection bound to the current context, if any"""
        return self._current_connection.get()

    @staticmethod
    def get_query_tracker() -> QueryTracker | None:
        return _query_tracker.get()

    @staticmethod
    def log_query(query: str, params: list[Any]):
        """Emit a debug line and feed the active query tracker"""
        logger.debug("sql: %s", query, extra={"param_count": len(params)})
        tracker = _query_tracker.get()
        if tracker:
            # Drop this frame and the DatabaseOperations frame
            stack = traceback.extract_stack()[:-2]
            tracker.log_query(query, params, "".join(traceback.format_list(stack)))

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[asyncpg.Connection]:
        """Scope one pooled connection to a logical operation.

        Nested calls reuse the connection already bound to the context.
        Otherwise one is acquired with `async with pool.acquire()`, which
        returns it to the pool on every exit path, exceptions included.
        """
        current_conn = self._current_connection.get()
        if current_conn is not None:
            yield current_conn
            return

        async with self._pool.acquire() as conn:
            token = self._current_connection.set(conn)
            try:
                yield conn
            finally:
                self._current_connection.reset(token)

    @staticmethod
    @asynccontextmanager
    async def track_queries() -> AsyncIterator[QueryTracker]:
        """Record every statement executed inside the block.

        async with DatabaseManager.track_queries() as tracker:
            await repo.list({}, page=1, limit=10)
            assert tracker.count() == 2
        """
        current_tracker = _query_tracker.get()

        if current_tracker:
            was_enabled = current_tracker.is_enabled()
            current_tracker.enable()
            try:
                yield current_tracker
            finally:
                if not was_enabled:
                    current_tracker.disable()
        else:
            tracker = QueryTracker()
            tracker.enable()
            token = _query_tracker.set(tracker)
            try:
                yield tracker
            finally:
                _query_tracker.reset(token)
