"""
Noteful API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the three failure modes of a request.
Why:   Services raise these without knowing about HTTP; the global handlers
       registered in main.py turn each one into a JSON error response.
How:   Each exception carries a user-facing message, a context dict for the
       server log, and the HTTP status code it maps to.

Exception Hierarchy:
    NotefulError (base)      → 500
    ├── ValidationError      → 400 Bad Request (missing required field)
    ├── NotFoundError        → 404 Not Found (by-id statement matched no row)
    └── StoreError           → 500 Internal Server Error (persistence failure)
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when a required request-body field is absent or empty.

    HTTP:    400 Bad Request
    Message: "Missing `<field>` in request body"

    Raised before any statement is sent to the store.
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field

    @classmethod
    def missing_field(cls, field: str) -> "ValidationError":
        return cls(message=f"Missing `{field}` in request body", field=field)


class NotFoundError(NotefulError):
    """
    Raised when a get-by-id or update-by-id statement matched no row.

    HTTP:    404 Not Found

    SQLAlchemy returns None for a missing row; services convert that None
    into this exception so routes stay free of existence checks.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(NotefulError):
    """
    Raised when a database statement fails.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    SQLAlchemy exception is chained (`raise ... from exc`) and logged
    server-side only.
    """

    status_code = 500
    error_code = "store_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
