"""
Abacus Backend — Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and messages that never leak internal details.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered once in main.py) catch these and
       return `{"error": <message>}` with the correct HTTP status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    AbacusError (base)                  → 500
    ├── ValidationError                 → 400 (calculator input, client can fix)
    │   ├── UnspecifiedOperationError
    │   ├── InvalidOperationError
    │   └── InvalidOperandError
    ├── BadRequestError                 → 400 (store rejected a write)
    ├── NotFoundError                   → 404
    └── DatabaseError                   → 500 (store/infra failure)
"""

from typing import Any, Dict, Optional


class AbacusError(Exception):
    """
    Base exception for all Abacus application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AbacusError):
    """
    Raised when client input fails validation.

    HTTP:    400 Bad Request
    Example response:
        {"error": "Invalid operand1: abc"}
    """

    status_code = 400

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


class UnspecifiedOperationError(ValidationError):
    """The `operation` query parameter was missing or empty."""

    def __init__(self):
        super().__init__(message="Unspecified operation", field="operation")


class InvalidOperationError(ValidationError):
    """The `operation` query parameter names no registered operation."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Invalid operation: {operation}",
            field="operation",
            context={"operation": operation},
        )
        self.operation = operation


class InvalidOperandError(ValidationError):
    """
    An operand is missing or is not a numeric literal.

    The message echoes the raw (untrimmed) value the client sent; a missing
    operand is rendered the way the query string omitted it ("None").
    """

    def __init__(self, field: str, raw_value: Optional[str]):
        super().__init__(
            message=f"Invalid {field}: {raw_value}",
            field=field,
        )
        self.raw_value = raw_value


class BadRequestError(AbacusError):
    """
    Raised when the document store rejects a write.

    HTTP:    400 Bad Request
    The underlying cause (schema mismatch, malformed id, driver error) stays
    in `context` for the logs; the client only sees "Bad request".
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Bad request",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AbacusError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found
    Message: "<Resource> not found", e.g. "Comment not found".
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(AbacusError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error
    The message returned to the client is always generic. Detailed error
    info (driver exception, identifier) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
