"""
Core middleware registration for the FastAPI application.
"""

from fastapi import FastAPI

from app.core.logging import get_logger
from app.core.middleware.error_handling import register_exception_handlers
from app.core.middleware.request_logging import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)

logger = get_logger(__name__)


def register_middlewares(app: FastAPI, include_security: bool = True) -> None:
    """
    Register core middlewares on ``app``.

    Middlewares run in reverse order of registration, so the request id is
    assigned before the logging middleware reads it.
    """
    app.add_middleware(RequestLoggingMiddleware)
    if include_security:
        app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    logger.debug("Core middlewares registered")


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "register_exception_handlers",
    "register_middlewares",
]
