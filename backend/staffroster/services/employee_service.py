"""
StaffRoster Backend: Employee Service (Resource Handler)
==========================================================

What:  Validation, lookup and mutation of employee records.
Why:   Keeps the business rules independent of HTTP; routes only translate
       the results (and the exceptions raised here) into responses.
How:   Validates create payloads, delegates to the injected RecordStore and
       converts "absent" results into NotFoundError.
Who:   Called by the /funcionario route handlers.

Validation Policy:
    create:
        name, role, salary  → falsy check (missing, "", 0 are rejected)
        terminated          → presence-only check (False is accepted)
    update:
        no validation; all four fields are written as given, missing
        ones as null (whole-record replacement)

Error Handling Strategy:
    Application exceptions propagate unchanged. Any other exception raised
    by the store is wrapped in StoreError with its message intact, so the
    caller always sees the underlying failure text with a 500.
"""

import logging
import math
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from staffroster.exceptions import NotFoundError, StaffRosterError, StoreError, ValidationError
from staffroster.schemas.employee import EmployeePayload, EmployeeResponse, MessageResponse
from staffroster.services.record_store import RecordStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name, role, salary and terminated status are required"
CREATED_MESSAGE = "Employee created successfully"
DELETED_MESSAGE = "Employee deleted successfully"


def _is_nan(value) -> bool:
    """NaN is truthy in Python but counts as a missing amount."""
    return isinstance(value, float) and math.isnan(value)


@asynccontextmanager
async def _store_call(operation: str) -> AsyncGenerator[None, None]:
    """Wraps a store call so non-application errors surface as StoreError."""
    try:
        yield
    except StaffRosterError:
        raise
    except Exception as e:
        logger.error("Record store failed during %s: %s", operation, str(e), exc_info=True)
        raise StoreError(
            message=str(e),
            context={"operation": operation, "error_type": type(e).__name__},
        ) from e


class EmployeeService:
    """
    Resource handler for employee records.

    Stateless apart from the injected store; the store handle's lifecycle
    belongs to the process bootstrap, not to this class.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    @staticmethod
    def validate_create(payload: EmployeePayload) -> None:
        """
        Enforce the create-only required-field policy.

        Raises:
            ValidationError: listing every offending field.
        """
        missing = [
            name
            for name, value in (
                ("name", payload.name),
                ("role", payload.role),
                ("salary", payload.salary),
            )
            if not value or _is_nan(value)
        ]
        # Presence-only: terminated=False is a valid value
        if payload.terminated is None:
            missing.append("terminated")

        if missing:
            raise ValidationError(message=REQUIRED_FIELDS_MESSAGE, fields=missing)

    async def create_employee(self, payload: EmployeePayload) -> MessageResponse:
        """
        Validate and persist a new employee.

        Returns:
            MessageResponse confirming creation (routes answer 201)

        Raises:
            ValidationError: Incomplete payload; nothing is written (→ 422)
            StoreError: The store failed (→ 500)
        """
        self.validate_create(payload)

        async with _store_call("create"):
            record = await self.store.create(payload.business_fields())

        logger.info("Employee created: %s", record.id)
        return MessageResponse(message=CREATED_MESSAGE)

    async def list_employees(self) -> List[EmployeeResponse]:
        """Every employee in the store, unfiltered and unpaginated."""
        async with _store_call("list"):
            return await self.store.find_all()

    async def get_employee(self, employee_id: str) -> EmployeeResponse:
        """
        Retrieve one employee.

        The id is passed to the store without format validation; a malformed
        id surfaces as the store's StoreError (→ 500).

        Raises:
            NotFoundError: No record has this id (→ 404)
        """
        async with _store_call("get"):
            record = await self.store.find_by_id(employee_id)

        if record is None:
            raise NotFoundError(resource="Employee", resource_id=employee_id)
        return record

    async def update_employee(
        self, employee_id: str, payload: EmployeePayload
    ) -> EmployeeResponse:
        """
        Replace all four business fields of an employee.

        Unlike create, no validation is applied: any subset of fields
        (including none) is written as-is.

        Returns:
            The post-update record

        Raises:
            NotFoundError: No record has this id (→ 404)
        """
        async with _store_call("update"):
            record = await self.store.replace_by_id(employee_id, payload.business_fields())

        if record is None:
            raise NotFoundError(resource="Employee", resource_id=employee_id)

        logger.info("Employee updated: %s", employee_id)
        return record

    async def delete_employee(self, employee_id: str) -> MessageResponse:
        """
        Remove an employee.

        Raises:
            NotFoundError: No record has this id (→ 404)
        """
        async with _store_call("delete"):
            record = await self.store.delete_by_id(employee_id)

        if record is None:
            raise NotFoundError(resource="Employee", resource_id=employee_id)

        logger.info("Employee deleted: %s", employee_id)
        return MessageResponse(message=DELETED_MESSAGE)
