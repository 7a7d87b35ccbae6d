"""
Global Exception Handlers for the FastAPI Application.

Routes translate expected failures into ``HTTPException`` themselves. The
handlers here catch what escapes them: chain and storage errors raised outside
a route's own handling, and any other unhandled exception. Each is logged with
an error id that is also returned to the client.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tenderchain.chain import ChainConnectionError, ChainError
from tenderchain.core.logging_config import get_logger
from tenderchain.core.monitoring import log_error
from tenderchain.storage import StorageError

logger = get_logger(__name__)


def _log_exception(request: Request, exc: Exception, label: str) -> int:
    error_id = id(exc)
    logger.error(
        f"{label} [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})
    return error_id


async def chain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle contract read failures that no route translated.

    Transport failures answer 503 so clients can retry; reverts answer 502.
    """
    error_id = _log_exception(request, exc, "Chain error")
    status_code = 503 if isinstance(exc, ChainConnectionError) else 502
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": "Blockchain request failed",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


async def storage_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle storage gateway failures that no route translated."""
    error_id = _log_exception(request, exc, "Storage error")
    return JSONResponse(
        status_code=502,
        content={
            "detail": "Storage request failed",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = _log_exception(request, exc, "Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ChainError, chain_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
