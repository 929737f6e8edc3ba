"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine

from tablesmith.services.provisioner import TableProvisioner


def get_provisioner(request: Request) -> TableProvisioner:
    """Return the provisioner built at startup."""
    return request.app.state.provisioner


def get_engine(request: Request) -> AsyncEngine:
    return request.app.state.db_engine


# Type aliases for dependency injection
Provisioner = Annotated[TableProvisioner, Depends(get_provisioner)]
Engine = Annotated[AsyncEngine, Depends(get_engine)]
