# src/ngo_registry/utils/error_handler.py
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.ngo_registry.utils.errors import ZoneError

logger = logging.getLogger("fastapi")


def _safe_args(exc: Exception) -> str:
    a = getattr(exc, "args", None)
    return str(a) if a else "No additional details"


def _json_error(
    status_code: int,
    message: str,
    exc: Exception,
    extra: Dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Unified JSON error response.
    Generic statuses get a fixed user-facing message; zone errors keep their own.
    """
    user_message = message
    if not isinstance(exc, ZoneError):
        if status_code == 404:
            user_message = "The requested resource was not found."
        elif status_code == 500:
            user_message = "Internal Server Error. Please try again later."

    payload: Dict[str, Any] = {
        "message": user_message,
        "error_type": exc.__class__.__name__,
        "status_code": status_code,
    }

    if extra:
        payload.update(extra)

    return JSONResponse(status_code=status_code, content=payload)


def _log_http(request: Request, status_code: int, detail: str, exc: Exception) -> None:
    """404 is routine, 409/422 mean the submission needs fixing, other 4xx and all 5xx are errors."""
    url = str(request.url)
    method = request.method

    if status_code == 404:
        logger.info("404 Not Found: %s %s", method, url)
        return

    if status_code in (409, 422):
        logger.warning("%s: %s %s | detail=%s", status_code, method, url, detail)
        return

    if 400 <= status_code < 500:
        logger.error(
            "%s: %s %s | detail=%s | args=%s",
            status_code,
            method,
            url,
            detail,
            _safe_args(exc),
        )
        return

    logger.exception("%s: %s %s | detail=%s", status_code, method, url, detail)


async def custom_exception_handler(request: Request, exc: Exception):
    """
    Single handler registered for HTTP errors, validation errors, zone errors
    and anything unexpected; always answers JSON.
    """

    # 1) Starlette / FastAPI HTTPException
    if isinstance(exc, StarletteHTTPException):
        status = int(exc.status_code)
        detail = str(exc.detail)
        _log_http(request, status, detail, exc)
        return _json_error(status_code=status, message=detail, exc=exc)

    # 2) Validation error
    if isinstance(exc, RequestValidationError):
        logger.warning(
            "422 Validation error: %s %s | %s",
            request.method,
            str(request.url),
            exc.errors(),
        )
        return _json_error(
            status_code=422,
            message="Validation error occurred",
            exc=exc,
            extra={"validation_errors": jsonable_errors(exc)},
        )

    # 3) Intervention-zone errors (duplicates, orphans, storage batches)
    if isinstance(exc, ZoneError):
        status = exc.status_code
        _log_http(request, status, str(exc), exc)
        return _json_error(status_code=status, message=str(exc), exc=exc, extra=exc.to_payload())

    # 4) Any other unexpected exception
    logger.exception("500 Unhandled exception: %s %s | %s", request.method, str(request.url), str(exc))
    return _json_error(
        status_code=500,
        message="Internal Server Error. Please try again later.",
        exc=exc,
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """pydantic error dicts may carry exception objects under 'ctx'."""
    out = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        out.append(err)
    return out
