"""
Inkwell Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception class carries a message, an optional context dict, an
       HTTP status code and a machine-readable error code. The handlers
       registered in main.py turn them into structured JSON responses.
Who:   Raised by the validation layer, services and the auth dependency.

Exception Hierarchy:
    InkwellError (base)                → 500
    ├── ValidationError                → 400 Bad Request
    ├── UnauthenticatedError           → 401 Unauthorized
    ├── InvalidCredentialsError        → 403 Forbidden (signin)
    ├── ForbiddenError                 → 403 Forbidden (ownership)
    ├── NotFoundError                  → 404 Not Found
    ├── ConflictError                  → 409 Conflict
    └── DatabaseError                  → 500 Internal Server Error

    InvalidTokenError is raised by the credential service only. It never
    reaches a handler: the auth dependency converts it to UnauthenticatedError.
"""

from typing import Any, Dict, List, Optional


class InkwellError(Exception):
    """
    Base exception for all Inkwell application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; handlers decide what is returned)
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


class ValidationError(InkwellError):
    """
    Raised when a request body, path or query parameter is malformed.

    `field` names the first failing field; `errors` holds one entry per
    failing field as `{"field": ..., "message": ...}`.

    Example response:
        {
            "error": "validation_error",
            "message": "email: value is not a valid email address",
            "details": {"field": "email", "errors": [...]}
        }
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []


class InvalidTokenError(InkwellError):
    """
    Raised by CredentialService.verify_token for a bad, malformed or
    expired token.
    """

    status_code = 401
    error_code = "invalid_token"

    def __init__(self, message: str = "Invalid or expired token", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class UnauthenticatedError(InkwellError):
    """
    Raised when a protected route is called without a valid bearer token.
    HTTP: 401 Unauthorized, with a `WWW-Authenticate: Bearer` header.
    """

    status_code = 401
    error_code = "unauthenticated"

    def __init__(
        self,
        message: str = "Authentication required. Please sign in.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(InkwellError):
    """
    Raised by signin for an unknown email or a wrong password.

    Both cases share this exception and its message so the response does not
    reveal which emails are registered.
    """

    status_code = 403
    error_code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Incorrect email or password", context=context)


class ForbiddenError(InkwellError):
    """
    Raised when an authenticated user acts on a resource they do not own.
    HTTP: 403 Forbidden
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "You are not allowed to modify this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(InkwellError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so routes stay free of HTTP logic.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(InkwellError):
    """
    Raised on a uniqueness violation: taken email or name at signup, or a
    repeated like.
    HTTP: 409 Conflict
    """

    status_code = 409
    error_code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(InkwellError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. Detailed error
    info (SQL, constraint names) is logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
