"""Unit tests for migrations.storage: PgMigrationStorage and migrate_in_transaction."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from psycopg import errors

from pgcompose.migrations import PgMigrationStorage, migrate_in_transaction

CREATE = 'CREATE TABLE IF NOT EXISTS "schema_migration" ("revision_id" TEXT NOT NULL PRIMARY KEY)'


def _run(coro) -> object:
    return asyncio.run(coro)


def _client() -> MagicMock:
    client = MagicMock()
    client.execute = AsyncMock(return_value=[])
    return client


def test_executed_creates_table_and_lists_names() -> None:
    client = _client()
    client.execute.side_effect = [
        [],
        [{"revision_id": "001_init"}, {"revision_id": "002_users"}],
    ]
    storage = PgMigrationStorage(client)

    assert _run(storage.executed()) == ["001_init", "002_users"]
    assert client.execute.await_args_list[0].args == (CREATE, [])
    assert client.execute.await_args_list[1].args == (
        'SELECT "revision_id" FROM "schema_migration" ORDER BY "revision_id" ASC',
        [],
    )


def test_table_created_once() -> None:
    client = _client()
    storage = PgMigrationStorage(client)

    _run(storage.log_migration("001_init"))
    _run(storage.log_migration("002_users"))

    creates = [c for c in client.execute.await_args_list if c.args[0] == CREATE]
    assert len(creates) == 1


def test_log_migration() -> None:
    client = _client()
    storage = PgMigrationStorage(client)

    _run(storage.log_migration("001_init"))

    assert client.execute.await_args_list[-1].args == (
        'INSERT INTO "schema_migration" ("revision_id") VALUES ($1) ON CONFLICT DO NOTHING',
        ["001_init"],
    )


def test_unlog_migration() -> None:
    client = _client()
    storage = PgMigrationStorage(client)

    _run(storage.unlog_migration("001_init"))

    assert client.execute.await_args_list[-1].args == (
        'DELETE FROM "schema_migration" WHERE "revision_id" = $1',
        ["001_init"],
    )


def test_custom_table_and_column() -> None:
    client = _client()
    client.execute.side_effect = [[], [{"name": "a"}]]
    storage = PgMigrationStorage(client, table_name="mig", column_name="name")

    assert _run(storage.executed()) == ["a"]
    assert client.execute.await_args_list[0].args[0] == (
        'CREATE TABLE IF NOT EXISTS "mig" ("name" TEXT NOT NULL PRIMARY KEY)'
    )


def test_migrate_in_transaction_commits() -> None:
    client = _client()
    callback = AsyncMock(return_value="done")

    assert _run(migrate_in_transaction(client, callback)) == "done"

    callback.assert_awaited_once_with(client)
    assert [c.args[0] for c in client.execute.await_args_list] == ["BEGIN", "COMMIT"]


def test_migrate_in_transaction_rolls_back_without_retry() -> None:
    client = _client()
    callback = AsyncMock(side_effect=errors.SerializationFailure())

    with pytest.raises(errors.SerializationFailure):
        _run(migrate_in_transaction(client, callback))

    assert callback.await_count == 1
    assert [c.args[0] for c in client.execute.await_args_list] == ["BEGIN", "ROLLBACK"]
