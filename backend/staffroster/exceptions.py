"""
StaffRoster Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the employee resource.
Why:   Typed exceptions let the global handlers in main.py pick the HTTP
       status code, so the service layer never deals with HTTP.
How:   Each exception carries a message and an optional context dict.
Who:   Raised by EmployeeService and the record store; caught by handlers.

Exception Hierarchy:
    StaffRosterError (base)
    ├── ValidationError   → 422 Unprocessable Entity
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error (message passed through)
"""

from typing import Any, Dict, Optional


class StaffRosterError(Exception):
    """
    Base exception for all StaffRoster application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StaffRosterError):
    """
    Raised when a create payload is incomplete.

    What:    The client omitted (or left falsy) a field required on create.
    HTTP:    422 Unprocessable Entity

    Example response:
        {
            "error": "Name, role, salary and terminated status are required",
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class NotFoundError(StaffRosterError):
    """
    Raised when no record exists at the given identifier.

    The record store returns None for absent records (not an exception);
    EmployeeService converts that None into this exception.
    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "Employee",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(StaffRosterError):
    """
    Raised when the record store fails.

    What:    Malformed identifier, lost connection, driver error.
    HTTP:    500 Internal Server Error

    Unlike most server errors, the message is surfaced verbatim to the
    caller. Callers must accept 500 for malformed identifiers.
    """

    def __init__(
        self,
        message: str = "Record store operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
