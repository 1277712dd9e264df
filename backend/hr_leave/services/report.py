"""Reporting service: per-calendar-month apportionment of leave requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hr_leave.config import get_settings
from hr_leave.exceptions import MalformedLeaveRequestError
from hr_leave.models.enums import LeaveStatus
from hr_leave.schemas.report import (
    DataQualityWarning,
    LeaveTypeStats,
    MonthAllocation,
    MonthlyApportionment,
    MonthlyLeaveReport,
)
from hr_leave.services.classifier import LeavePolicy, classify_leave_request, deductible_days
from hr_leave.services.dates import day_span, end_of_month, iter_month_starts, month_key, start_of_month
from hr_leave.services.leave_request import get_employee_or_404, get_leave_requests_for_employee

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterable
    from datetime import date

    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.services.classifier import ClassifiedLeave, LeaveRequestLike

logger = logging.getLogger(__name__)


def split_across_months(leave: ClassifiedLeave, policy: LeavePolicy) -> list[tuple[date, float]]:
    """Split a request's deductible days into (month_start, days) pairs.

    Fixed-quantity types are never split: the whole quantity lands in the
    month of the start date. Allocations always sum to ``deductible_days``.
    """
    total = deductible_days(leave, policy)
    rule = policy.rule_for(leave.leave_type)
    first_month = start_of_month(leave.start_date)

    if rule.fixed_days is not None or first_month == start_of_month(leave.end_date):
        return [(first_month, total)]

    allocations: list[tuple[date, float]] = []
    remaining = total
    for month_start in iter_month_starts(leave.start_date, leave.end_date):
        if remaining <= 0:
            break
        sub_start = max(month_start, leave.start_date)
        sub_end = min(end_of_month(month_start), leave.end_date)
        days = min(remaining, day_span(sub_start, sub_end) * rule.multiplier)
        allocations.append((month_start, days))
        remaining -= days
    return allocations


def _add_allocation(bucket: MonthlyApportionment, leave: ClassifiedLeave, days: float) -> None:
    """Record an allocation and roll it into the month's aggregates."""
    bucket.allocations.append(
        MonthAllocation(request_id=leave.request_id, leave_type=leave.leave_type, status=leave.status, days=days)
    )
    bucket.total_requests += 1
    bucket.total_days += days
    if leave.status == LeaveStatus.APPROVED:
        bucket.approved_days += days
    elif leave.status == LeaveStatus.PENDING:
        bucket.pending_days += days
    elif leave.status == LeaveStatus.REJECTED:
        bucket.rejected_days += days

    stats = bucket.leave_type_stats.setdefault(leave.leave_type.value, LeaveTypeStats())
    stats.days += days
    stats.request_count += 1


def apportion_by_month(
    leave_requests: Iterable[LeaveRequestLike],
    policy: LeavePolicy | None = None,
    tz: str = "UTC",
) -> MonthlyLeaveReport:
    """Apportion leave requests to the calendar months they touch.

    Requests are processed in ascending start-date order so splitting is
    reproducible regardless of input order. Every leave type is reported,
    deductible or not. Stored timestamps are read as calendar dates in
    ``tz``. Malformed requests are returned as warnings.
    """
    policy = policy or LeavePolicy()
    warnings: list[DataQualityWarning] = []
    leaves: list[ClassifiedLeave] = []

    for request in leave_requests:
        try:
            leaves.append(classify_leave_request(request, tz))
        except MalformedLeaveRequestError as exc:
            logger.warning("Leave request %s excluded from monthly report: %s", exc.request_id, exc.message)
            warnings.append(DataQualityWarning(request_id=request.id, reason=exc.message))

    leaves.sort(key=lambda leave: leave.start_date)

    buckets: dict[date, MonthlyApportionment] = {}
    for leave in leaves:
        for month_start, days in split_across_months(leave, policy):
            bucket = buckets.get(month_start)
            if bucket is None:
                bucket = MonthlyApportionment(
                    month_key=month_key(month_start),
                    year=month_start.year,
                    month=month_start.month,
                )
                buckets[month_start] = bucket
            _add_allocation(bucket, leave, days)

    months = [buckets[m] for m in sorted(buckets, reverse=True)]
    return MonthlyLeaveReport(months=months, warnings=warnings)


async def get_employee_leave_report(
    session: AsyncSession,
    employee_id: uuid.UUID,
) -> MonthlyLeaveReport:
    """Build the monthly leave report for an employee."""
    employee = await get_employee_or_404(employee_id)
    requests = await get_leave_requests_for_employee(session, employee_id)
    return apportion_by_month(requests, LeavePolicy.from_settings(get_settings()), employee.timezone)

