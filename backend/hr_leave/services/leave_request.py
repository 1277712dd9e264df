"""Read access to the leave request store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from hr_leave.exceptions import AppError
from hr_leave.models.leave_request import LeaveRequest
from hr_leave.services.employee import EmployeeInfo, get_employee_service

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


async def get_employee_or_404(employee_id: uuid.UUID) -> EmployeeInfo:
    """Fetch an employee from the Employee Service. Raises 404 if not found."""
    employee = await get_employee_service().get_employee(employee_id)
    if employee is None:
        raise AppError("Employee not found", status_code=404)
    return employee


async def get_leave_requests_for_employee(
    session: AsyncSession,
    employee_id: uuid.UUID,
) -> list[LeaveRequest]:
    """Fetch every leave request of an employee in one query.

    The single SELECT is the snapshot the engine computes against.
    """
    result = await session.execute(
        select(LeaveRequest)
        .where(col(LeaveRequest.employee_id) == employee_id)
        .order_by(col(LeaveRequest.start_date), col(LeaveRequest.created_at))
    )
    return list(result.scalars().all())
