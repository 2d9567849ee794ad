"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling
- logging_middleware: Request/response logging with a bound request id

Usage:
======
    from esoteric_planner.api.middleware import setup_exception_handlers, setup_request_logging

    app = FastAPI()
    setup_exception_handlers(app)
    setup_request_logging(app)
"""

from esoteric_planner.api.middleware.error_handler import setup_exception_handlers
from esoteric_planner.api.middleware.logging_middleware import setup_request_logging

__all__ = [
    "setup_exception_handlers",
    "setup_request_logging",
]
