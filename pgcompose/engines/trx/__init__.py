"""
Transaction and savepoint executors with a retry policy.

Exports: with_transaction, with_savepoint, TransactionOptions, IsolationLevel,
AccessMode, is_retryable_error.
"""

from pgcompose.engines.trx.transaction import with_savepoint, with_transaction
from pgcompose.engines.trx.types import (
    AccessMode,
    IsolationLevel,
    TransactionOptions,
    is_retryable_error,
)

__all__ = [
    "with_transaction",
    "with_savepoint",
    "TransactionOptions",
    "IsolationLevel",
    "AccessMode",
    "is_retryable_error",
]
