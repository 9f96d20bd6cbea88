"""
Runtime settings for pgcompose.

Values are read from the environment (prefix ``PGCOMPOSE_``) or a local
``.env`` file, e.g. ``PGCOMPOSE_POSTGRES_SERVER=db``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PGCOMPOSE_",
        env_ignore_empty=True,
        extra="ignore",
    )

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "app"

    # Seconds; passed to libpq as connect_timeout
    CONNECT_TIMEOUT: int = Field(default=10, ge=0)
    # Seconds; None or 0 disables SET statement_timeout on connect
    STATEMENT_TIMEOUT: float | None = None

    TRX_MAX_RETRIES: int = Field(default=2, ge=0)

    MIGRATION_TABLE_NAME: str = "schema_migration"
    MIGRATION_COLUMN_NAME: str = "revision_id"


settings = Settings()
