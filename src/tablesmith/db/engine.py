"""Async SQLAlchemy engine creation."""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tablesmith.config import Settings, settings as default_settings


def enable_transactional_ddl(engine: AsyncEngine) -> None:
    """Make SQLite DDL honour SQLAlchemy transactions.

    The sqlite3 driver only opens a transaction before DML, so CREATE/DROP
    statements would commit immediately. Turn off the driver's implicit
    transaction handling and emit BEGIN ourselves when a transaction starts.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(config: Settings | None = None, url: str | None = None) -> AsyncEngine:
    """Create the pooled async engine described by ``config``."""
    config = config or default_settings
    engine = create_async_engine(
        url or config.database_url,
        echo=False,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
    )
    if engine.dialect.name == "sqlite":
        enable_transactional_ddl(engine)
    return engine
