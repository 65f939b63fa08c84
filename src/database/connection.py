"""
Database connection management
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import asyncpg

from config.settings import DatabaseSettings

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Outcome of a write statement"""
    affected_rows: int = 0
    inserted_id: Optional[int] = None


def parse_affected_rows(status: str) -> int:
    """Read the row count from a command status tag such as 'UPDATE 1' or 'INSERT 0 3'"""
    if not status:
        return 0
    last = status.split()[-1]
    return int(last) if last.isdigit() else 0


class RecordStore:
    """Owns the single live connection to the employees database.

    Statements are bound positionally and driver errors are raised to the
    caller as-is. The connection is opened once and never re-established.
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None):
        self.settings = settings or DatabaseSettings.from_env()
        self._conn: Optional[asyncpg.Connection] = None
        # asyncpg connections run one statement at a time
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._conn is not None and not self._conn.is_closed()

    async def connect(self) -> None:
        """Open the connection"""
        self._conn = await asyncpg.connect(
            host=self.settings.host,
            port=self.settings.port,
            user=self.settings.user,
            password=self.settings.password,
            database=self.settings.database,
            ssl="require" if self.settings.ssl else None,
            timeout=self.settings.connect_timeout,
            statement_cache_size=0  # pgbouncer compatibility
        )
        logger.info(f"Connected to database {self.settings.describe()}")

    async def close(self) -> None:
        """Close the connection"""
        if self._conn is not None and not self._conn.is_closed():
            await self._conn.close()
        self._conn = None
        logger.info("Database connection closed")

    def _connection(self) -> asyncpg.Connection:
        if self._conn is None:
            raise RuntimeError("Database connection not initialized")
        return self._conn

    async def fetch(self, query: str, *params: Any) -> List[Dict[str, Any]]:
        """Run a read statement and return its rows as dicts"""
        conn = self._connection()
        logger.info(f"Executing query: {query}")
        logger.info(f"Parameters: {params}")
        async with self._lock:
            rows = await conn.fetch(query, *params)
        return [dict(row) for row in rows]

    async def fetchval(self, query: str, *params: Any) -> Any:
        """Run a read statement and return the first column of the first row"""
        conn = self._connection()
        logger.info(f"Executing query: {query}")
        logger.info(f"Parameters: {params}")
        async with self._lock:
            return await conn.fetchval(query, *params)

    async def execute(self, query: str, *params: Any) -> WriteResult:
        """
        Run a write statement

        Statements ending in a RETURNING clause report the first returned
        column as the inserted id.
        """
        conn = self._connection()
        logger.info(f"Executing statement: {query}")
        logger.info(f"Parameters: {params}")
        async with self._lock:
            if "RETURNING" in query.upper():
                rows = await conn.fetch(query, *params)
                return WriteResult(
                    affected_rows=len(rows),
                    inserted_id=rows[0][0] if rows else None
                )
            status = await conn.execute(query, *params)
        return WriteResult(affected_rows=parse_affected_rows(status))
