"""
pgcompose: composable parameterized SQL and transaction helpers for PostgreSQL.
"""

from pgcompose.core.connect import PgClient, PsycopgClient, connect
from pgcompose.engines.sql import (
    CompositeQuery,
    CompositeQueryWithClient,
    InjectableQuery,
    sql,
)
from pgcompose.engines.trx import (
    AccessMode,
    IsolationLevel,
    TransactionOptions,
    is_retryable_error,
    with_savepoint,
    with_transaction,
)

__all__ = [
    "sql",
    "CompositeQuery",
    "CompositeQueryWithClient",
    "InjectableQuery",
    "with_transaction",
    "with_savepoint",
    "TransactionOptions",
    "IsolationLevel",
    "AccessMode",
    "is_retryable_error",
    "PgClient",
    "PsycopgClient",
    "connect",
]
