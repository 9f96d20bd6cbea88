"""
Run a unit of work inside a transaction or a savepoint.

with_transaction: BEGIN / work / COMMIT, ROLLBACK on error and retry the whole
transaction while the retry policy allows it.
with_savepoint: SAVEPOINT / work / RELEASE inside an already open transaction,
ROLLBACK TO SAVEPOINT on error. Never retries.

Only ``Exception`` triggers ROLLBACK. Cancellation (``asyncio.CancelledError``)
leaves the transaction open; the caller owns the connection at that point.
"""

import inspect
import logging
import uuid
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from pgcompose.core.connect import PgClient
from pgcompose.engines.trx.types import (
    NO_ACTIVE_SQL_TRANSACTION,
    TransactionOptions,
    get_sqlstate,
)

_log = logging.getLogger(__name__)

Client = TypeVar("Client", bound=PgClient)
Result = TypeVar("Result")

Queries = Callable[[Client], Awaitable[Result] | Result]

SAVEPOINT_SUFFIX = "_savepoint"


def _resolve_options(
    options: TransactionOptions | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> TransactionOptions:
    if isinstance(options, TransactionOptions):
        if not overrides:
            return options
        data = {**options.model_dump(), **overrides}
    else:
        data = {**(options or {}), **overrides}
    return TransactionOptions.model_validate(data)


async def _run(queries: Queries, tx: Any) -> Any:
    result = queries(tx)
    if inspect.isawaitable(result):
        result = await result
    return result


async def with_transaction(
    client: Client,
    queries: Queries,
    options: TransactionOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Any:
    """
    Execute *queries(client)* within a transaction and return its result.

    - Committed when *queries* returns; rolled back when it raises.
    - After ROLLBACK the transaction is retried up to ``max_retries`` times
      (default 2) while ``should_retry(error)`` is true. By default only
      serialization failures (40001) and deadlocks (40P01) are retried.
    - Otherwise the original error is re-raised unchanged.

    Options are validated before anything is sent; invalid values raise
    ``pydantic.ValidationError``.
    """
    opts = _resolve_options(options, overrides)
    begin_statement = opts.begin_statement
    retries_left = opts.max_retries
    attempt = 1

    while True:
        try:
            await client.execute(begin_statement)
            result = await _run(queries, client)
            await client.execute("COMMIT")
            return result
        except Exception as error:
            await client.execute("ROLLBACK")
            if retries_left <= 0 or not opts.should_retry(error):
                raise
            _log.warning(
                "Transaction attempt %d failed with %s; retrying (%d retries left)",
                attempt,
                type(error).__name__,
                retries_left - 1,
            )
            retries_left -= 1
            attempt += 1


def new_savepoint_name() -> str:
    """Unique savepoint name; starts with a letter so it is a valid bare identifier."""
    return f"sp_{uuid.uuid4().hex}{SAVEPOINT_SUFFIX}"


async def with_savepoint(tx: Client, queries: Queries) -> Any:
    """
    Execute *queries(tx)* within a savepoint of the transaction open on *tx*.

    The savepoint is released on success and rolled back (then released) on
    any error before re-raising it. When the error says there is no active
    transaction (25P01) rollback is skipped: it could only fail as well.
    """
    savepoint = new_savepoint_name()

    try:
        await tx.execute(f"SAVEPOINT {savepoint}")
        result = await _run(queries, tx)
        await tx.execute(f"RELEASE SAVEPOINT {savepoint}")
        return result
    except Exception as error:
        if get_sqlstate(error) == NO_ACTIVE_SQL_TRANSACTION:
            _log.debug("No active transaction; skipping rollback of %s", savepoint)
        else:
            await tx.execute(
                f"ROLLBACK TO SAVEPOINT {savepoint}; RELEASE SAVEPOINT {savepoint}"
            )
        raise
