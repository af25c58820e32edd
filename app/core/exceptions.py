"""
Global exception handling for the application.
Every error leaves the API as ``{"error": <message>[, "details": <details>]}``.
"""

from typing import Any, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

MISSING_REQUIRED_FIELDS = "missing_required_fields"


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Any] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Recurso no encontrado.", details: Optional[Any] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ProductNotFoundError(EntityNotFoundException):
    """No row in ``productos`` matched the requested id."""
    def __init__(self, message: str = "Producto no encontrado."):
        super().__init__(message)


class DatastoreError(AppError):
    """Connection failure, constraint violation or timeout in the datastore."""
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


def error_body(message: str, details: Optional[Any] = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map pydantic/FastAPI validation failures to 400."""
    errors = exc.errors()
    # Only create has required fields; an absent body elsewhere is just invalid
    creating = request.method == "POST"
    missing = any(
        err.get("type") == MISSING_REQUIRED_FIELDS
        or (creating and err.get("type") == "missing" and tuple(err.get("loc", ())) == ("body",))
        for err in errors
    )
    logger.warning("Validation failed", path=request.url.path, errors=len(errors))

    if missing:
        content = error_body("Faltan campos obligatorios: nombre y costo_venta.")
    else:
        content = error_body(
            "Datos de producto inválidos.",
            [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                for err in errors
            ],
        )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything the services did not translate."""
    logger.error(
        "Unhandled error",
        path=request.url.path,
        error=str(exc),
        error_type=exc.__class__.__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Error interno del servidor."),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
