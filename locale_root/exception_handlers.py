"""
Exception handlers

Errors leave the app in one JSON envelope:

{
    "error": {
        "status_code": 404,
        "error_code": "PAGE_NOT_FOUND",
        "message": "The requested page could not be found.",
        "type": "Not Found",
        "path": "/en-US/"
    }
}

A 404 is answered with the static ``error_page_path`` file instead, when one
is configured.
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from locale_root.exceptions import ErrorCode, LocaleRoutingError

logger = logging.getLogger(__name__)

# Statuses the root router and its collaborators can end a request with
ERROR_TYPES = {
    404: ("Not Found", ErrorCode.PAGE_NOT_FOUND),
    405: ("Method Not Allowed", ErrorCode.METHOD_NOT_ALLOWED),
    500: ("Internal Server Error", ErrorCode.INTERNAL_ERROR),
    503: ("Service Unavailable", ErrorCode.CONTENT_STORE_UNAVAILABLE),
}


def get_error_type(status_code: int) -> str:
    return ERROR_TYPES.get(status_code, ("Error", None))[0]


def get_http_error_code(status_code: int) -> str:
    return ERROR_TYPES.get(status_code, (None, ErrorCode.UNKNOWN_ERROR))[1].value


def create_error_response(
    status_code: int,
    message: str,
    error_code: str | ErrorCode | None = None,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    """Build the error envelope; empty fields are left out."""
    error: dict[str, Any] = {
        "status_code": status_code,
        "message": message,
        "type": get_error_type(status_code),
    }
    if error_code:
        error["error_code"] = error_code.value if isinstance(error_code, ErrorCode) else error_code
    if details:
        error["details"] = details
    if path:
        error["path"] = path

    return JSONResponse(status_code=status_code, content={"error": error})


def _error_page(request: Request) -> Path | None:
    settings = getattr(request.app.state, "settings", None)
    if settings is None or not settings.error_page_path:
        return None
    page = Path(settings.error_page_path)
    return page if page.is_file() else None


async def locale_routing_exception_handler(request: Request, exc: LocaleRoutingError) -> JSONResponse:
    logger.error(
        f"{type(exc).__name__}: {exc.message}",
        extra={"status_code": exc.status_code, "error_code": exc.error_code.value, "path": request.url.path},
    )
    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        path=request.url.path,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Answer NotFound decisions and unmatched paths, serving the error page for 404s if set."""
    logger.info(f"{exc.status_code} on {request.url.path}: {exc.detail}")

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        page = _error_page(request)
        if page is not None:
            return FileResponse(page, status_code=status.HTTP_404_NOT_FOUND, media_type="text/html")

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code=get_http_error_code(exc.status_code),
        path=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Details go to the log only
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred. Please try again later.",
        error_code=ErrorCode.INTERNAL_ERROR,
        path=request.url.path,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(LocaleRoutingError, locale_routing_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
