"""Monthly paid-leave limit analysis for a prospective leave request.

Usage is counted in business days (weekends excluded) per calendar month.
Fixed-quantity types such as half-days contribute their quantity to the
month their start date falls in, or nothing when that day is a weekend.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hr_leave.config import get_settings
from hr_leave.exceptions import AppError, MalformedLeaveRequestError
from hr_leave.models.enums import LeaveStatus, LeaveType
from hr_leave.schemas.report import MonthlyLimitAnalysis, PaidLeaveLimitCheck
from hr_leave.services.classifier import LeavePolicy, classify_leave_request
from hr_leave.services.dates import as_date, business_days, end_of_month, iter_month_starts, month_key
from hr_leave.services.leave_request import get_employee_or_404, get_leave_requests_for_employee

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterable
    from datetime import date, datetime

    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.services.classifier import LeaveRequestLike

logger = logging.getLogger(__name__)


def _days_in_month(
    leave_type: LeaveType,
    start: date,
    end: date,
    month_start: date,
    policy: LeavePolicy,
) -> float:
    """Paid days of a [start, end] range that fall in the given month."""
    rule = policy.rule_for(leave_type)
    month_end = end_of_month(month_start)

    if rule.fixed_days is not None:
        # Fixed quantities land in the start month and only on a working day.
        if not month_start <= start <= month_end or business_days(start, start) == 0:
            return 0.0
        return rule.fixed_days

    clipped_start = max(start, month_start)
    clipped_end = min(end, month_end)
    if clipped_start > clipped_end:
        return 0.0
    return business_days(clipped_start, clipped_end) * rule.multiplier


def check_paid_leave_limit(
    leave_requests: Iterable[LeaveRequestLike],
    start: date | datetime,
    end: date | datetime,
    leave_type: LeaveType,
    policy: LeavePolicy | None = None,
    tz: str = "UTC",
) -> PaidLeaveLimitCheck:
    """Check whether a prospective request would push any month over the paid limit.

    Existing usage only counts approved requests of deductible types.
    Non-deductible request types never count towards the limit. Stored
    timestamps are read as calendar dates in ``tz``.
    """
    policy = policy or LeavePolicy()
    start_day = as_date(start, tz)
    end_day = as_date(end, tz)
    if end_day < start_day:
        raise AppError("end_date must not be before start_date", status_code=422)

    if not policy.is_deductible(leave_type):
        return PaidLeaveLimitCheck(would_exceed=False, will_be_paid=True, total_request_days=0)

    approved = []
    for request in leave_requests:
        try:
            leave = classify_leave_request(request, tz)
        except MalformedLeaveRequestError as exc:
            logger.warning("Skipping malformed leave request %s: %s", exc.request_id, exc.message)
            continue
        if leave.status == LeaveStatus.APPROVED and policy.is_deductible(leave.leave_type):
            approved.append(leave)

    limit = policy.monthly_paid_leave_limit
    per_month: list[MonthlyLimitAnalysis] = []
    for month_start in iter_month_starts(start_day, end_day):
        current_usage = sum(
            _days_in_month(leave.leave_type, leave.start_date, leave.end_date, month_start, policy)
            for leave in approved
        )
        request_days = _days_in_month(leave_type, start_day, end_day, month_start, policy)
        new_total = current_usage + request_days
        per_month.append(
            MonthlyLimitAnalysis(
                month_key=month_key(month_start),
                current_usage=current_usage,
                request_days_in_month=request_days,
                new_total=new_total,
                limit=limit,
                remaining=max(0.0, limit - current_usage),
                would_exceed=new_total > limit,
            )
        )

    would_exceed = any(month.would_exceed for month in per_month)
    return PaidLeaveLimitCheck(
        would_exceed=would_exceed,
        will_be_paid=not would_exceed,
        total_request_days=sum(month.request_days_in_month for month in per_month),
        per_month=per_month,
    )


async def get_paid_leave_limit_check(
    session: AsyncSession,
    employee_id: uuid.UUID,
    start: date,
    end: date,
    leave_type: LeaveType,
) -> PaidLeaveLimitCheck:
    """Run the paid-leave limit check against an employee's approved leave."""
    employee = await get_employee_or_404(employee_id)
    requests = await get_leave_requests_for_employee(session, employee_id)
    policy = LeavePolicy.from_settings(get_settings())
    return check_paid_leave_limit(requests, start, end, leave_type, policy, employee.timezone)
