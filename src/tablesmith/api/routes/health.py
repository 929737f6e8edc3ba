"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text

from tablesmith.dependencies import Engine

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health_check():
    """Liveness probe: 200 "OK" while the process is running."""
    return "OK"


@router.get("/health/ready")
async def readiness(engine: Engine):
    """Readiness probe — checks that a pooled connection can run a query."""
    checks: dict[str, str] = {}
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as exc:
        checks["database"] = f"error: {exc}"

    ok = checks["database"] == "ok"
    return JSONResponse(
        status_code=200 if ok else 503,
        content={"status": "ready" if ok else "not_ready", "checks": checks},
    )
