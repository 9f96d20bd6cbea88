"""
Engines: composable SQL (sql) and transaction execution (trx).
"""

from pgcompose.engines.sql import CompositeQuery, InjectableQuery, sql
from pgcompose.engines.trx import (
    AccessMode,
    IsolationLevel,
    TransactionOptions,
    with_savepoint,
    with_transaction,
)

__all__ = [
    "sql",
    "CompositeQuery",
    "InjectableQuery",
    "with_transaction",
    "with_savepoint",
    "TransactionOptions",
    "IsolationLevel",
    "AccessMode",
]
