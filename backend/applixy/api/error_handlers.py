"""Error Handlers — turn Applixy failures into the JSON the screens render.

Invariants:
    - ApplixyError keeps its own status: VALIDATION_FAILED 400, AUTH_REQUIRED
      and INVALID_CREDENTIALS 401, ACCOUNT_EXISTS 409, NOT_FOUND 404,
      TRANSPORT_ERROR 503
    - The body message is the form-facing user_message when the error carries one
    - 401 carries WWW-Authenticate: Bearer so clients know to fetch a token
    - 503 carries Retry-After: the store outage is the client's to retry, never ours
    - Malformed request bodies (pydantic) → 400 VALIDATION_ERROR with per-field details
    - Anything else → 500 INTERNAL_ERROR without internal details

Design Decisions:
    - Log level follows the status: store outages and crashes at ERROR,
      rejected forms and missing sign-ins at WARNING
    - Log records carry the error's collection / document / user so a failed
      submission can be traced to its form
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from applixy.core.errors import ApplixyError, ErrorSeverity

logger = logging.getLogger(__name__)

TRANSPORT_RETRY_AFTER_SECONDS = 5


def register_error_handlers(app: FastAPI) -> None:
    _register_applixy_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _headers_for(exc: ApplixyError) -> dict[str, str] | None:
    if exc.http_status == status.HTTP_401_UNAUTHORIZED:
        return {"WWW-Authenticate": "Bearer"}
    if exc.http_status == status.HTTP_503_SERVICE_UNAVAILABLE:
        return {"Retry-After": str(TRANSPORT_RETRY_AFTER_SECONDS)}
    return None


def _register_applixy_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ApplixyError)
    async def applixy_error_handler(request: Request, exc: ApplixyError):
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "collection": exc.context.collection,
                "document_id": exc.context.document_id,
                "user_id": exc.context.user_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=_headers_for(exc),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Body or query failed its schema (size limits, category pattern, wait_ms range)."""
        logger.warning(
            f"Malformed request on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Something went wrong, please try again",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """One detail per offending field; `field` drops the body/query prefix."""
    details = []
    for e in exc.errors():
        loc = [str(part) for part in e["loc"]]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        details.append({
            "field": ".".join(loc),
            "message": e["msg"],
            "type": e["type"],
        })
    fields = ", ".join(d["field"] for d in details if d["field"])
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": f"Please check: {fields}" if fields else "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": details,
        },
    }
