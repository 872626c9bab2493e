"""
Central error handling for the organization hierarchy service
"""
import logging
import traceback

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

from org_hierarchy.core.config import settings
from org_hierarchy.core.exceptions import (
    StoreError,
    RecordNotFoundError,
    DuplicateRecordError,
    HierarchyLoadError,
)

logger = logging.getLogger(__name__)


def _error_body(status_code: int, detail, request: Request, **extra) -> dict:
    body = {
        "error": True,
        "status_code": status_code,
        "detail": detail,
        "path": str(request.url.path)
    }
    body.update(extra)
    return body


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail, request),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError with consistent JSON response format

    Does not leak internal validation details in production.
    """
    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(422, "Validation error: Invalid request data", request)
        )

    # Sanitize for JSON: e.g. ctx.error ValueError -> str
    errors = []
    for e in exc.errors():
        err = dict(e)
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {
                k: (str(v) if not isinstance(v, (str, int, float, bool, type(None))) else v)
                for k, v in err["ctx"].items()
            }
        errors.append(err)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(422, "Validation error", request, errors=errors)
    )


async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    """
    Map store failures to HTTP responses

    Not found -> 404, duplicate unique field -> 409, anything else -> 500
    with the failing table named in the detail.
    """
    if isinstance(exc, RecordNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(404, exc.message, request, table=exc.table)
        )
    if isinstance(exc, DuplicateRecordError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=_error_body(409, exc.message, request, table=exc.table)
        )

    logger.error(f"Store error on table {exc.table}: {exc.message}", exc_info=exc.cause)
    detail = f"Failed to access {exc.table}"
    if settings.APP_ENV != "prod":
        detail = f"{detail}: {exc.message}"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(500, detail, request, table=exc.table)
    )


async def hierarchy_load_exception_handler(request: Request, exc: HierarchyLoadError) -> JSONResponse:
    """The hierarchy view is all-or-nothing; a missing level makes it unavailable"""
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(
            503,
            f"Organization hierarchy is unavailable: failed to load {exc.level}",
            request,
            level=exc.level,
        )
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with consistent JSON response format

    Does not leak internal error details in production.
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(500, "Internal server error", request)
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            500,
            str(exc),
            request,
            traceback=traceback.format_exc() if settings.APP_ENV == "local" else None
        )
    )
