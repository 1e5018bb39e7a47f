# File: /viewengine/core/error_handlers.py | Version: 1.1 | Title: Standardized Error Handlers (optional)
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)

_CODE_MAP = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    413: "SNAPSHOT_TOO_LARGE",
    422: "UNPROCESSABLE_ENTITY",
    429: "TOO_MANY_REQUESTS",
    500: "INTERNAL_SERVER_ERROR",
}


def _err(code: int, message: str, details=None):
    body = {"error": {"code": _CODE_MAP.get(code, "ERROR"), "message": message}}
    if details:
        body["error"]["details"] = details
    return body


def _locations(errors) -> list:
    # "database.rows.3.cells" style paths; no input values are echoed back
    return [
        {"loc": ".".join(str(p) for p in e.get("loc", ())), "msg": e.get("msg", "")}
        for e in errors
    ]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(_req: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code, content=_err(exc.status_code, str(exc.detail))
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(_req: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=_err(422, "Validation error", _locations(exc.errors())),
        )

    @app.exception_handler(ValidationError)
    async def _snapshot_exc(_req: Request, exc: ValidationError):
        """Embedding apps that hand plain dicts to materialize() get a 422 too."""
        return JSONResponse(
            status_code=422,
            content=_err(422, "Invalid snapshot", _locations(exc.errors())),
        )

    @app.exception_handler(Exception)
    async def _unhandled(_req: Request, exc: Exception):
        log.exception("Unhandled error")
        # Avoid leaking internals
        return JSONResponse(status_code=500, content=_err(500, "Internal server error"))
