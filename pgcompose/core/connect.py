"""
Driver capability for composed queries and transactions.

Anything with ``async execute(text, values=None) -> list[dict]`` can be used as
a client. ``PsycopgClient`` adapts a psycopg ``AsyncConnection`` opened with
``AsyncRawCursor`` so the ``$1..$n`` placeholders produced by the query
builder are sent to PostgreSQL as-is.
"""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

import psycopg
from psycopg import AsyncRawCursor

from pgcompose.core.config import settings

_log = logging.getLogger(__name__)


class PgClient(Protocol):
    """Execute SQL text with positional parameters and return row dicts."""

    async def execute(
        self, text: str, values: Sequence[Any] | None = None
    ) -> list[dict[str, Any]]: ...


async def cursor_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert the cursor's pending result to a list of dicts (empty for DML)."""
    desc = cursor.description
    if not desc:
        return []
    names = [d[0] for d in desc]
    rows = await cursor.fetchall()
    return [dict(zip(names, row, strict=True)) for row in rows]


class PsycopgClient:
    """``PgClient`` over a psycopg ``AsyncConnection``.

    The connection must be in autocommit mode: transaction control is sent
    explicitly (``BEGIN``/``COMMIT``/``SAVEPOINT``) by the executors.
    """

    def __init__(self, conn: psycopg.AsyncConnection) -> None:
        self._conn = conn

    @property
    def connection(self) -> psycopg.AsyncConnection:
        return self._conn

    async def execute(
        self, text: str, values: Sequence[Any] | None = None
    ) -> list[dict[str, Any]]:
        # Without parameters psycopg uses the simple query protocol, which
        # allows several statements in one call.
        params = list(values) if values else None
        async with AsyncRawCursor(self._conn) as cur:
            await cur.execute(text, params)
            return await cursor_to_dicts(cur)

    async def close(self) -> None:
        await self._conn.close()


async def connect(conninfo: str = "", **kwargs: Any) -> PsycopgClient:
    """
    Open an autocommit connection and wrap it in ``PsycopgClient``.

    - conninfo: libpq connection string; when empty, host/port/dbname/user/password
      come from ``settings.POSTGRES_*``. Keyword arguments override either.
    """
    params: dict[str, Any] = {}
    if not conninfo:
        params = {
            "host": settings.POSTGRES_SERVER,
            "port": settings.POSTGRES_PORT,
            "dbname": settings.POSTGRES_DB,
            "user": settings.POSTGRES_USER,
            "password": settings.POSTGRES_PASSWORD,
        }
    params.setdefault("connect_timeout", settings.CONNECT_TIMEOUT)
    params.update(kwargs)

    conn = await psycopg.AsyncConnection.connect(
        conninfo,
        autocommit=True,
        cursor_factory=AsyncRawCursor,
        **params,
    )
    client = PsycopgClient(conn)

    timeout_sec = settings.STATEMENT_TIMEOUT
    if timeout_sec is not None and timeout_sec > 0:
        timeout_ms = int(timeout_sec * 1000)
        try:
            await client.execute(f"SET statement_timeout = {timeout_ms}")
        except Exception:
            await conn.close()
            raise
        _log.debug("statement_timeout set to %s ms", timeout_ms)

    return client
