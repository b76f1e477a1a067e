"""
Blog API Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions, one per failure class the API exposes.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers registered in main.py turn them into JSON
       responses with the matching HTTP status code.
Who:   Raised by the auth gate, the validators and the services.

Exception Hierarchy:
    BlogAPIError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── DatabaseError            → 500 Internal Server Error
    └── ServiceUnavailableError  → 503 Service Unavailable (retryable)

Status mapping:
    Auth failures, duplicates and timeouts each get their own status code so
    that callers can tell "bad token" apart from "database is down".
"""

from typing import Any, Dict, List, Optional


class BlogAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where noted)
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogAPIError):
    """
    Raised when client input fails validation.

    When:    Body shape mismatch, malformed JSON, invalid path identifier.
    HTTP:    400 Bad Request

    `violations` is a list of {"field": ..., "message": ...} entries; it is
    returned to the client under `details.violations`.
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Invalid inputs",
        field: Optional[str] = None,
        violations: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if violations:
            ctx["violations"] = violations
        super().__init__(message=message, context=ctx)
        self.field = field
        self.violations = violations or []


class AuthenticationError(BlogAPIError):
    """
    Raised when a request carries no credential or an unverifiable one.

    HTTP:    401 Unauthorized
    `reason` is one of "missing" or "invalid".
    """

    status_code = 401
    error_code = "authentication_failed"

    def __init__(
        self,
        message: str = "authentication failed",
        reason: str = "invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason


class NotFoundError(BlogAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /posts/{id} with an id that has no row.
    HTTP:    404 Not Found

    SQLAlchemy returns None (or a zero rowcount) for missing records; the
    service layer converts that into this exception.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(BlogAPIError):
    """
    Raised when a write collides with an existing unique value.

    When:    Signup with an email that is already registered.
    HTTP:    409 Conflict

    Detected from the store's UNIQUE constraint, so two concurrent signups
    with the same email cannot both succeed.
    """

    status_code = 409
    error_code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(BlogAPIError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. SQL text,
        constraint names and driver errors are logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ServiceUnavailableError(BlogAPIError):
    """
    Raised when a persistence operation exceeds its time budget.

    HTTP:    503 Service Unavailable, with a Retry-After header.
    """

    status_code = 503
    error_code = "service_unavailable"

    def __init__(
        self,
        message: str = "The service is temporarily unavailable. Please retry shortly.",
        retry_after: int = 5,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
