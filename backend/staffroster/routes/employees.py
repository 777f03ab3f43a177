"""
StaffRoster Backend: Employee Route Handlers
==============================================

What:  CRUD endpoints for the employee resource.
Why:   The HTTP surface of the service; mounted under settings.resource_prefix
       (default /funcionario) by main.create_app.
How:   Each handler parses the request, calls EmployeeService and returns
       the response model with the right status code. Failures propagate as
       application exceptions to the global handlers in main.py.

Endpoints:
    POST   /        create       201 {message}  | 422, 500
    GET    /        list         200 [employee] | 500
    GET    /{id}    get          200 employee   | 404, 500
    PUT    /{id}    update       200 employee   | 404, 500
    DELETE /{id}    delete       200 {message}  | 404, 500
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Request

from staffroster.schemas.employee import (
    EmployeePayload,
    EmployeeResponse,
    ErrorResponse,
    MessageResponse,
)
from staffroster.services.employee_service import EmployeeService

router = APIRouter(tags=["Employees"])


def get_employee_service(request: Request) -> EmployeeService:
    """
    FastAPI dependency: EmployeeService bound to the application's store.

    The store handle lives on app.state and is owned by the lifespan (or by
    whoever passed it to create_app).
    """
    return EmployeeService(request.app.state.record_store)


@router.post(
    "",
    status_code=201,
    response_model=MessageResponse,
    responses={
        201: {"description": "Employee created", "model": MessageResponse},
        422: {"description": "Name, role, salary and terminated are required", "model": ErrorResponse},
        500: {"description": "Record store error", "model": ErrorResponse},
    },
    summary="Create an employee",
)
@router.post("/", status_code=201, response_model=MessageResponse, include_in_schema=False)
async def create_employee(
    payload: EmployeePayload,
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    """
    Create a new employee.

    `name`, `role` and `salary` must be truthy (empty strings and 0 are
    rejected); `terminated` must be present, and `false` is accepted.
    """
    return await service.create_employee(payload)


@router.get(
    "",
    response_model=List[EmployeeResponse],
    responses={
        200: {"description": "All employees"},
        500: {"description": "Record store error", "model": ErrorResponse},
    },
    summary="List all employees",
)
@router.get("/", response_model=List[EmployeeResponse], include_in_schema=False)
async def list_employees(
    service: EmployeeService = Depends(get_employee_service),
) -> List[EmployeeResponse]:
    return await service.list_employees()


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        200: {"description": "Employee found", "model": EmployeeResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
        500: {"description": "Record store error (including malformed ids)", "model": ErrorResponse},
    },
    summary="Get an employee by ID",
)
async def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    """
    Fetch one employee.

    Args:
        employee_id: Opaque store id. Deliberately typed as str: the store,
                     not FastAPI, rejects malformed ids (→ 500).
    """
    return await service.get_employee(employee_id)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        200: {"description": "Employee updated", "model": EmployeeResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
        500: {"description": "Record store error", "model": ErrorResponse},
    },
    summary="Replace an employee by ID",
)
async def update_employee(
    employee_id: str,
    payload: Optional[EmployeePayload] = Body(default=None),
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    """
    Replace all four business fields. No required-field validation is
    applied; omitted fields (or a missing body) are stored as null.
    """
    if payload is None:
        payload = EmployeePayload()
    return await service.update_employee(employee_id, payload)


@router.delete(
    "/{employee_id}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Employee deleted", "model": MessageResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
        500: {"description": "Record store error", "model": ErrorResponse},
    },
    summary="Delete an employee by ID",
)
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    return await service.delete_employee(employee_id)
