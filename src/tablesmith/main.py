"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tablesmith.config import settings
from tablesmith.db.engine import create_db_engine
from tablesmith.logging_config import configure_logging
from tablesmith.services.provisioner import TableProvisioner

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the connection pool and the shared provisioner."""
    engine = create_db_engine(settings)
    app.state.db_engine = engine
    app.state.provisioner = TableProvisioner(
        engine, transactional_ddl=settings.transactional_ddl
    )
    logger.info(
        "Tablesmith API started (db=%s, pool_size=%d, transactional_ddl=%s)",
        "sqlite" if settings.is_sqlite else engine.dialect.name,
        settings.pool_size,
        settings.transactional_ddl,
    )
    yield

    await engine.dispose()
    logger.info("Tablesmith API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Tablesmith API",
        version="0.1.0",
        description="Turns declarative table definitions into DDL executed against SQLite.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from tablesmith.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    from tablesmith.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from tablesmith.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
