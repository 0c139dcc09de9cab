import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.domain.errors import (
    DatabaseFault,
    DatabaseInitializationError,
    InvalidTaskError,
)
from infrastructure.peewee.errors import root_cause

logger = logging.getLogger(__name__)


def _is_dev() -> bool:
    return os.getenv("APP_ENV", "").strip().lower() == "dev"


def _body(request: Request, status_code: int, error: str, exc: Exception) -> dict:
    body = {
        "status": status_code,
        "error": error,
        "path": request.url.path,
        "method": request.method,
        "message": str(exc),
    }
    if _is_dev():
        root = root_cause(exc)
        if root is not exc:
            body["rootCause"] = type(root).__name__
            body["rootMessage"] = str(root)
    return body


async def invalid_task_handler(request: Request, exc: InvalidTaskError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_body(request, 400, "Bad request", exc))


async def database_fault_handler(request: Request, exc: DatabaseFault) -> JSONResponse:
    logger.error(
        f"❌ {request.method} {request.url.path} -> {exc.error_code} ({exc.operation})",
        exc_info=exc,
    )
    if isinstance(exc, DatabaseInitializationError):
        body = _body(request, 500, "Database initialization failed", exc)
        body["databasePath"] = exc.database_path
    else:
        body = _body(request, 500, "Database operation failed", exc)
    body["errorCode"] = exc.error_code
    body["operation"] = exc.operation
    return JSONResponse(status_code=500, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidTaskError, invalid_task_handler)
    app.add_exception_handler(DatabaseFault, database_fault_handler)
