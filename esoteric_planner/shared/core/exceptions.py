"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    PlannerException (base)
       │
       ├── AuthenticationError (401)       ← Missing/invalid token, bad credentials
       ├── AuthorizationError (403)        ← Not an admin, no access
       │      └── GenerationLimitError     ← Trial ended / quota used up
       ├── NotFoundError (404)             ← Resource not found (or not owned)
       ├── ValidationError (400)           ← Invalid input data
       ├── ConflictError (409)             ← Resource already exists
       │      └── DuplicateResourceError
       ├── ServiceUnavailableError (503)   ← Service down or not configured
       │      └── ConfigurationError       ← Missing third-party credentials
       └── ExternalServiceError (502)      ← LLM / email / payment provider failed

Usage:
======
    from esoteric_planner.shared.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError("Strategy", strategy_id)
    # {"error": {"code": "NOT_FOUND", "message": "Strategy with id 'abc' not found"}}

    raise ValidationError("Password too short", details={"field": "new_password"})

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "GENERATION_LIMIT",
            "message": "Trial period has ended, subscribe to continue",
            "details": {"limit_reached": true}
        }
    }
"""

from typing import Any, Optional


class PlannerException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(PlannerException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Missing or invalid token
    - Token expired or malformed
    - Invalid email/password on login
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(PlannerException):
    """
    Authorization failed error (403 Forbidden).

    Raised when user is authenticated but lacks permission.
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "AUTHORIZATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code=error_code,
            details=details,
        )


class GenerationLimitError(AuthorizationError):
    """
    The user may not run another AI generation.

    Clients use details.limit_reached to show the subscription screen.
    """

    def __init__(self, reason: str, remaining: int = 0) -> None:
        super().__init__(
            message=reason,
            details={"limit_reached": True, "remaining": remaining},
            error_code="GENERATION_LIMIT",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(PlannerException):
    """
    Resource not found error (404 Not Found).

    Also used for records owned by another user, so ownership is never leaked.

    Example:
        raise NotFoundError("Strategy", strategy_id)
        # Message: "Strategy with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(PlannerException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails business validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictError(PlannerException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Promocode already exists")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """
    Duplicate resource error.

    Specific case of conflict when trying to create duplicate resource.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE ERRORS (502, 503)
# ═══════════════════════════════════════════════════════════════════════════════


class ServiceUnavailableError(PlannerException):
    """
    Service temporarily unavailable error (503).
    """

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
            details=details,
        )


class ConfigurationError(ServiceUnavailableError):
    """
    A third-party integration is missing its credentials.

    Example:
        raise ConfigurationError("DEEPSEEK_API_KEY")
    """

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            message=f"{setting_name} is not configured",
            details={"setting": setting_name},
        )
        self.error_code = "NOT_CONFIGURED"


class ExternalServiceError(PlannerException):
    """
    External service call failed (502 Bad Gateway).

    Raised when the LLM provider, email API or payment gateway returns an
    error or a response that cannot be used.
    """

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        msg = message or f"{service_name} service error"
        extra_details = details or {}
        extra_details["service"] = service_name
        super().__init__(
            message=msg,
            status_code=502,
            error_code="EXTERNAL_SERVICE_ERROR",
            details=extra_details,
        )
