"""FastAPI exception handlers producing the ErrorResponse envelope."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tablesmith.errors.exceptions import TablesmithError
from tablesmith.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(TablesmithError)
    async def tablesmith_error_handler(request: Request, exc: TablesmithError):
        trace_id = getattr(request.state, "trace_id", "trc_unknown")
        level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        logger.log(
            level,
            "request_failed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "code": str(exc.code),
                "reason": exc.message,
                "details": exc.details,
            },
        )
        error_response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
                trace_id=trace_id,
                timestamp=datetime.now(timezone.utc),
            ),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response.model_dump(mode="json", exclude_none=True),
        )
