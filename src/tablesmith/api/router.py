"""Master API router."""

from fastapi import APIRouter

from tablesmith.api.routes import health, tables

api_router = APIRouter()
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(tables.router)
