"""Error Handlers - global exception handlers for the registry API.

Invariants:
    - RegistryError → its http_status, empty body, logged with code and path
    - Framework HTTP errors (unknown path 404, method 405) → empty body
    - Exception (catch-all) → 500, empty body, logged with traceback

Design Decisions:
    - Three-layer handler: domain (RegistryError), framework (HTTPException), catch-all
    - No error envelope: clients only see the status code
"""

import logging

from fastapi import FastAPI, Request, Response, status
from starlette.exceptions import HTTPException as StarletteHTTPException

from endpoint_registry.api.dependencies import describe_client
from endpoint_registry.core.errors import RegistryError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_registry_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_registry_error_handler(app: FastAPI) -> None:
    """Register registry domain/store error handler."""

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError):
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level, exc.message,
            extra={
                **exc.log_extra(),
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return Response(status_code=exc.http_status)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for routing errors raised by Starlette."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            logger.warning(
                f"request from {describe_client(request)} rejected: "
                f"method {request.method} not allowed",
                extra={"method": request.method, "path": request.url.path},
            )
        else:
            logger.info(
                f"{request.method} {request.url.path}: {exc.detail}",
                extra={"status_code": exc.status_code},
            )
        return Response(status_code=exc.status_code, headers=exc.headers)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
