"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from esoteric_planner.shared.core.logging import logger, get_logger
    from esoteric_planner.shared.core.exceptions import PlannerException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from esoteric_planner.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from esoteric_planner.shared.core.exceptions import (
    PlannerException,
    AuthenticationError,
    AuthorizationError,
    GenerationLimitError,
    NotFoundError,
    UserNotFoundError,
    ValidationError,
    ConflictError,
    DuplicateResourceError,
    ServiceUnavailableError,
    ConfigurationError,
    ExternalServiceError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "PlannerException",
    "AuthenticationError",
    "AuthorizationError",
    "GenerationLimitError",
    "NotFoundError",
    "UserNotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateResourceError",
    "ServiceUnavailableError",
    "ConfigurationError",
    "ExternalServiceError",
]
