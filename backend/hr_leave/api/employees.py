# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter

from hr_leave.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from hr_leave.services.employee import EmployeeInfo, get_employee_service
from hr_leave.services.leave_request import get_employee_or_404

employees_router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)


def _build_employee_response(employee: EmployeeInfo) -> EmployeeResponse:
    return EmployeeResponse(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        join_date=employee.join_date,
        timezone=employee.timezone,
    )


@employees_router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def upsert_employee(
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
) -> EmployeeResponse:
    """Create or update an employee in the stub service."""
    svc = get_employee_service()
    employee = EmployeeInfo(
        id=employee_id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        join_date=payload.join_date,
        timezone=payload.timezone,
    )
    svc.seed(employee)  # ty: ignore[unresolved-attribute]
    return _build_employee_response(employee)


@employees_router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def get_employee(employee_id: uuid.UUID) -> EmployeeResponse:
    """Get employee info from the stub service."""
    employee = await get_employee_or_404(employee_id)
    return _build_employee_response(employee)


@employees_router.get(
    "",
    response_model=EmployeeListResponse,
)
async def list_employees() -> EmployeeListResponse:
    """List all employees from the stub service."""
    employees = await get_employee_service().list_employees()
    items = [_build_employee_response(e) for e in employees]
    return EmployeeListResponse(items=items, total=len(items))
