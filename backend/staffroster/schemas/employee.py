"""
StaffRoster Backend: Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract for the employee resource.
Why:   Typed request bodies, automatic serialization, OpenAPI generation.
How:   FastAPI validates bodies against EmployeePayload and serializes the
       response models below.

Design Decision:
    EmployeePayload declares every field optional. Required-field checks for
    create are business rules owned by EmployeeService (422 with a single
    message), and update intentionally accepts any subset of fields.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, FiniteFloat


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeePayload(BaseModel):
    """
    Body of POST / and PUT /{id}.

    Absent keys come through as None. Types are coerced by Pydantic
    (e.g. "5000" → 5000). Values that cannot be coerced, and non-finite
    salaries (NaN, Infinity), are rejected by FastAPI's request validation
    before reaching the service.
    """
    name: Optional[str] = Field(default=None, description="Employee name")
    role: Optional[str] = Field(default=None, description="Job role / position")
    salary: Optional[Union[int, FiniteFloat]] = Field(default=None, description="Salary amount")
    terminated: Optional[bool] = Field(
        default=None,
        description="True when the employee is no longer employed",
    )

    def business_fields(self) -> dict:
        """All four business fields, missing ones as None (whole-record replacement)."""
        return {
            "name": self.name,
            "role": self.role,
            "salary": self.salary,
            "terminated": self.terminated,
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """
    What:  A persisted employee record.
    Who:   Returned by GET /, GET /{id} and PUT /{id}.

    `id` is the store-assigned opaque identifier. Business fields can be
    null for records written by an unvalidated update.
    """
    id: str = Field(description="Store-assigned identifier")
    name: Optional[str] = Field(default=None, description="Employee name")
    role: Optional[str] = Field(default=None, description="Job role / position")
    salary: Optional[Union[int, float]] = Field(default=None, description="Salary amount")
    terminated: Optional[bool] = Field(default=None, description="No longer employed")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Confirmation body for create (201) and delete (200)."""
    message: str = Field(description="Human-readable confirmation")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failing endpoint.

    Example:
        {"error": "Employee not found", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and record store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Record store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
