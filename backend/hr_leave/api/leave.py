# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Query

from hr_leave.db import SessionDep
from hr_leave.models.enums import LeaveType
from hr_leave.schemas.balance import LeaveBalance
from hr_leave.schemas.report import MonthlyLeaveReport, PaidLeaveLimitCheck
from hr_leave.services import balance as balance_service
from hr_leave.services import paid_limit as paid_limit_service
from hr_leave.services import report as report_service

leave_router = APIRouter(
    prefix="/employees/{employee_id}",
    tags=["leave"],
)


@leave_router.get("/leave-balance", response_model=LeaveBalance)
async def get_leave_balance(
    employee_id: uuid.UUID,
    session: SessionDep,
    as_of: date | None = Query(default=None),
) -> LeaveBalance:
    """Get an employee's leave balance as of a date (defaults to today)."""
    return await balance_service.get_employee_leave_balance(session, employee_id, as_of)


@leave_router.get("/leave-report", response_model=MonthlyLeaveReport)
async def get_leave_report(
    employee_id: uuid.UUID,
    session: SessionDep,
) -> MonthlyLeaveReport:
    """Get an employee's leave apportioned per calendar month, most recent first."""
    return await report_service.get_employee_leave_report(session, employee_id)


@leave_router.get("/paid-leave-check", response_model=PaidLeaveLimitCheck)
async def check_paid_leave(
    employee_id: uuid.UUID,
    session: SessionDep,
    start_date: date = Query(),
    end_date: date = Query(),
    leave_type: LeaveType = Query(),
) -> PaidLeaveLimitCheck:
    """Check whether a prospective request stays within the monthly paid-leave limit."""
    return await paid_limit_service.get_paid_leave_limit_check(session, employee_id, start_date, end_date, leave_type)
