"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every error body has the
envelope DomainProvisioningException.to_dict() produces:
{"error": CODE, "message": str, "details": {...}}, so admin clients parse
framework errors (bad body, unknown route) the same way as provider ones.
"""

from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from custom_domains.core.config import get_settings
from custom_domains.domain.exceptions import DomainProvisioningException
from custom_domains.shared.telemetry.logging import get_logger
from custom_domains.shared.telemetry.tracing import get_trace_id

logger = get_logger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_DOMAIN": 400,
    "DOMAIN_NOT_FOUND": 404,
    "DOMAIN_CONFLICT": 409,
    "PROVIDER_REJECTED": 502,
    "PROVIDER_UNAVAILABLE": 503,
    "SERVICE_UNAVAILABLE": 503,
}

# Leading loc entry naming where a request value came from.
_LOC_SOURCES = ("body", "query", "path", "header")


def _error_response(
    status: int,
    error: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": error, "message": message, "details": details or {}},
        headers=headers,
    )


def _field_name(loc: Sequence[Any]) -> str:
    """Dotted field path without the source prefix: ("body", "domain") -> "domain"."""
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _LOC_SOURCES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def _domain_exception_handler(
    request: Request, exc: DomainProvisioningException
) -> JSONResponse:
    """Return JSON from DomainProvisioningException.to_dict() with the mapped status."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 naming each rejected field, e.g. {"field": "domain", "message": "..."}."""
    fields = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    if fields:
        first = fields[0]
        message = f"Invalid {first['field']}: {first['message']}"
    else:
        message = "Invalid request"
    return _error_response(422, "VALIDATION_ERROR", message, {"fields": fields})


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same envelope."""
    return _error_response(
        exc.status_code,
        "HTTP_ERROR",
        str(exc.detail),
        {"method": request.method, "path": request.url.path},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    details: dict[str, Any] = {}
    trace_id = get_trace_id()
    if trace_id:
        details["trace_id"] = trace_id
    return _error_response(500, "INTERNAL_ERROR", message, details)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: DomainProvisioningException (and subclasses),
    RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(DomainProvisioningException, _domain_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
