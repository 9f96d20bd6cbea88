from pgcompose.migrations.storage import PgMigrationStorage, migrate_in_transaction

__all__ = ["PgMigrationStorage", "migrate_in_transaction"]
