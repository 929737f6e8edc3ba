"""Tests for environment-driven settings and engine construction."""

from sqlalchemy.pool import AsyncAdaptedQueuePool

from tablesmith.config import Settings
from tablesmith.db.engine import create_db_engine


def test_defaults():
    config = Settings(_env_file=None)
    assert config.database_url == "sqlite+aiosqlite:///app.sqlite"
    assert config.transactional_ddl is True
    assert config.port == 8080
    assert config.is_sqlite


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("TABLESMITH_POOL_SIZE", "3")
    monkeypatch.setenv("TABLESMITH_POOL_TIMEOUT", "0.5")
    monkeypatch.setenv("TABLESMITH_TRANSACTIONAL_DDL", "false")
    config = Settings(_env_file=None)
    assert config.pool_size == 3
    assert config.pool_timeout == 0.5
    assert config.transactional_ddl is False


async def test_engine_uses_bounded_pool(tmp_path):
    engine = create_db_engine(
        Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'pool.db'}",
            pool_size=4,
            max_overflow=1,
            pool_timeout=2.5,
        )
    )
    try:
        pool = engine.sync_engine.pool
        assert isinstance(pool, AsyncAdaptedQueuePool)
        assert pool.size() == 4
        assert pool.timeout() == 2.5
    finally:
        await engine.dispose()


async def test_sqlite_ddl_rolls_back(db_engine):
    async with db_engine.connect() as conn:
        trans = await conn.begin()
        await conn.exec_driver_sql("CREATE TABLE scratch (id INTEGER)")
        await trans.rollback()

    async with db_engine.connect() as conn:
        result = await conn.exec_driver_sql(
            "SELECT 1 FROM sqlite_master WHERE name = 'scratch'"
        )
        assert result.first() is None
