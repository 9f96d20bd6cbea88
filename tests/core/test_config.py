"""Unit tests for core.config.Settings."""

import pytest
from pydantic import ValidationError

from pgcompose.core.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PGCOMPOSE_TRX_MAX_RETRIES", raising=False)
    s = Settings(_env_file=None)
    assert s.TRX_MAX_RETRIES == 2
    assert s.MIGRATION_TABLE_NAME == "schema_migration"
    assert s.MIGRATION_COLUMN_NAME == "revision_id"
    assert s.STATEMENT_TIMEOUT is None


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PGCOMPOSE_POSTGRES_SERVER", "db.internal")
    monkeypatch.setenv("PGCOMPOSE_TRX_MAX_RETRIES", "5")
    s = Settings(_env_file=None)
    assert s.POSTGRES_SERVER == "db.internal"
    assert s.TRX_MAX_RETRIES == 5


def test_negative_retries_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PGCOMPOSE_TRX_MAX_RETRIES", "-1")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
