"""
Transaction options: isolation level, access mode and retry policy.

See https://www.postgresql.org/docs/current/sql-set-transaction.html for the
meaning of each isolation level and access mode.
"""

from collections.abc import Callable
from enum import Enum

import psycopg
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from pgcompose.core.config import settings

SERIALIZATION_FAILURE = "40001"
DEADLOCK_DETECTED = "40P01"
NO_ACTIVE_SQL_TRANSACTION = "25P01"

RETRYABLE_SQLSTATES = frozenset({SERIALIZATION_FAILURE, DEADLOCK_DETECTED})


class IsolationLevel(str, Enum):
    """Transaction isolation level. DEFAULT leaves the server setting in place."""

    DEFAULT = "DEFAULT"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


class AccessMode(str, Enum):
    """Transaction access mode. DEFAULT leaves the server setting in place."""

    DEFAULT = "DEFAULT"
    READ_WRITE = "READ WRITE"
    READ_ONLY = "READ ONLY"


def get_sqlstate(error: BaseException) -> str | None:
    """SQLSTATE of a psycopg error, None for anything else."""
    if isinstance(error, psycopg.Error):
        return error.sqlstate
    return None


def is_retryable_error(error: BaseException) -> bool:
    """Serialization failures (40001) and deadlocks (40P01) are worth retrying."""
    return get_sqlstate(error) in RETRYABLE_SQLSTATES


ShouldRetryPredicate = Callable[[BaseException], bool]


class TransactionOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    isolation_level: IsolationLevel = IsolationLevel.DEFAULT
    access_mode: AccessMode = AccessMode.DEFAULT
    max_retries: StrictInt = Field(
        default_factory=lambda: settings.TRX_MAX_RETRIES,
        ge=0,
        description="Retries after the first attempt; 0 disables retrying.",
    )
    should_retry: ShouldRetryPredicate = Field(
        default=is_retryable_error,
        description="Called with the error after ROLLBACK; True retries the transaction.",
    )

    @property
    def begin_statement(self) -> str:
        """``BEGIN`` with isolation/access clauses; DEFAULT clauses are omitted."""
        parts = ["BEGIN"]
        if self.isolation_level != IsolationLevel.DEFAULT:
            parts.append(f"ISOLATION LEVEL {self.isolation_level.value}")
        if self.access_mode != AccessMode.DEFAULT:
            parts.append(self.access_mode.value)
        return " ".join(parts)
