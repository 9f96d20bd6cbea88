"""
Bookkeeping table for applied migrations.

One table with a single text primary key column; created on first use.
Table and column names default to ``settings.MIGRATION_TABLE_NAME`` and
``settings.MIGRATION_COLUMN_NAME``.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pgcompose.core.config import settings
from pgcompose.core.connect import PgClient
from pgcompose.engines.sql import quote_ident, sql
from pgcompose.engines.trx import with_transaction

_log = logging.getLogger(__name__)

Result = TypeVar("Result")


class PgMigrationStorage:
    """executed / log_migration / unlog_migration against one table."""

    def __init__(
        self,
        client: PgClient,
        table_name: str | None = None,
        column_name: str | None = None,
    ) -> None:
        self.client = client
        self.table_name = table_name or settings.MIGRATION_TABLE_NAME
        self.column_name = column_name or settings.MIGRATION_COLUMN_NAME
        self._table = sql.raw(quote_ident(self.table_name))
        self._column = sql.raw(quote_ident(self.column_name))
        self._table_created = False

    async def executed(self) -> list[str]:
        """Names of applied migrations, ascending."""
        await self._create_table()
        query = sql(
            "SELECT {} FROM {} ORDER BY {} ASC", self._column, self._table, self._column
        )
        rows = await query.execute(self.client)
        return [row[self.column_name] for row in rows]

    async def log_migration(self, migration_name: str) -> None:
        await self._create_table()
        query = sql(
            "INSERT INTO {} ({}) VALUES ({}) ON CONFLICT DO NOTHING",
            self._table,
            self._column,
            migration_name,
        )
        await query.execute(self.client)
        _log.info("Logged migration %s", migration_name)

    async def unlog_migration(self, migration_name: str) -> None:
        await self._create_table()
        query = sql(
            "DELETE FROM {} WHERE {} = {}", self._table, self._column, migration_name
        )
        await query.execute(self.client)
        _log.info("Unlogged migration %s", migration_name)

    async def _create_table(self) -> None:
        if self._table_created:
            return
        query = sql(
            "CREATE TABLE IF NOT EXISTS {} ({} TEXT NOT NULL PRIMARY KEY)",
            self._table,
            self._column,
        )
        await query.execute(self.client)
        self._table_created = True


async def migrate_in_transaction(
    client: PgClient, callback: Callable[[PgClient], Awaitable[Result]]
) -> Result:
    """Run *callback* in one transaction; migrations are never retried."""
    return await with_transaction(client, callback, max_retries=0)
