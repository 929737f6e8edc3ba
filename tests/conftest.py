"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from tablesmith.config import Settings
from tablesmith.db.engine import create_db_engine
from tablesmith.services.provisioner import TableProvisioner


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a throwaway SQLite file (in-memory SQLite has no pool)."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tablesmith.db'}",
        pool_size=2,
        max_overflow=0,
        pool_timeout=1.0,
        json_logs=False,
    )


@pytest.fixture
async def db_engine(test_settings):
    engine = create_db_engine(test_settings)
    yield engine
    await engine.dispose()


@pytest.fixture
def provisioner(db_engine):
    return TableProvisioner(db_engine)


@pytest.fixture
def compensating_provisioner(db_engine):
    """Provisioner that emulates atomicity with a compensating DROP TABLE."""
    return TableProvisioner(db_engine, transactional_ddl=False)


@pytest.fixture
def app(db_engine, provisioner):
    """Create a test application instance bound to the temporary database."""
    from tablesmith.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.provisioner = provisioner
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
