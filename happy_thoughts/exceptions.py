"""
Happy Thoughts API — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON error envelope with the matching HTTP status code.
Who:   Raised by the store adapter, the service layer, and the validator.

Exception Hierarchy:
    HappyThoughtsError (base)
    ├── InvalidIdError     → 400 Bad Request (malformed ObjectId)
    ├── ValidationError    → 400 Bad Request (message rules violated)
    ├── NotFoundError      → 404 Not Found
    └── DatabaseError      → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class HappyThoughtsError(Exception):
    """
    Base exception for all Happy Thoughts application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HappyThoughtsError):
    """
    Raised when client input fails validation.

    When:    Message missing, too short, too long, or not a string;
             request body not parseable.
    HTTP:    400 Bad Request

    Example response:
        {
            "success": false,
            "response": null,
            "message": "Message must be at least 5 characters long",
            "error": "validation_error",
            "details": {"field": "message", "constraint": "too_short", ...}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        constraint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if constraint:
            ctx["constraint"] = constraint
        super().__init__(message=message, context=ctx)
        self.field = field
        self.constraint = constraint


class InvalidIdError(HappyThoughtsError):
    """
    Raised when a path id is not a well-formed MongoDB ObjectId.

    When:    Checked before any query is sent, so a malformed id never
             reaches the driver.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        value: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if value is not None:
            ctx["id"] = value
        super().__init__(message="Invalid ID format", context=ctx)
        self.value = value


class NotFoundError(HappyThoughtsError):
    """
    Raised when a requested resource does not exist.

    When:    GET, PATCH like, or DELETE on a well-formed id with no document.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(HappyThoughtsError):
    """
    Raised when a store operation fails unexpectedly.

    What:    Server selection timed out, connection dropped, write rejected.
    HTTP:    500 Internal Server Error

    The message is an operation-level summary ("Could not fetch thoughts").
    Driver details go into context and are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
