"""Leave balance calculator: accrual, taken, pending and year-to-date figures."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from hr_leave.config import get_settings
from hr_leave.exceptions import InvalidJoinDateError, MalformedLeaveRequestError
from hr_leave.models.enums import LeaveStatus
from hr_leave.schemas.balance import LeaveBalance
from hr_leave.services.classifier import LeavePolicy, classify_leave_request, deductible_days
from hr_leave.services.dates import add_months, as_date, months_elapsed, start_of_month, start_of_year
from hr_leave.services.leave_request import get_employee_or_404, get_leave_requests_for_employee

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_leave.services.classifier import ClassifiedLeave, LeaveRequestLike
    from hr_leave.services.employee import EmployeeInfo

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@dataclass
class _DeductibleTotals:
    """Deductible day sums for one window of request start dates."""

    taken: float = 0.0
    pending: float = 0.0


def _classify_all(requests: Iterable[LeaveRequestLike], tz: str) -> list[ClassifiedLeave]:
    """Classify requests, logging and skipping malformed ones."""
    classified: list[ClassifiedLeave] = []
    for request in requests:
        try:
            classified.append(classify_leave_request(request, tz))
        except MalformedLeaveRequestError as exc:
            logger.warning("Skipping malformed leave request %s: %s", exc.request_id, exc.message)
    return classified


def _sum_deductible(
    leaves: list[ClassifiedLeave],
    policy: LeavePolicy,
    window_start: date | None,
    window_end: date,
) -> _DeductibleTotals:
    """Sum approved and pending deductible days for requests starting in the window."""
    totals = _DeductibleTotals()
    for leave in leaves:
        if not policy.is_deductible(leave.leave_type):
            continue
        # Future leave has not happened yet from the snapshot's point of view.
        if leave.start_date > window_end:
            continue
        if window_start is not None and leave.start_date < window_start:
            continue

        if leave.status == LeaveStatus.APPROVED:
            totals.taken += deductible_days(leave, policy)
        elif leave.status == LeaveStatus.PENDING:
            totals.pending += deductible_days(leave, policy)
    return totals


# ---------------------------------------------------------------------------
# Pure computation
# ---------------------------------------------------------------------------


def calculate_leave_balance(
    employee: EmployeeInfo,
    leave_requests: Iterable[LeaveRequestLike],
    as_of: date | datetime | None = None,
    policy: LeavePolicy | None = None,
) -> LeaveBalance:
    """Compute an employee's leave balance as of a date.

    Accrual is whole months since joining times the policy rate. Approved
    requests count as taken and pending requests as a soft reservation;
    both only when their type is deductible and they started on or before
    ``as_of``, reading stored timestamps in the employee's time zone.
    Malformed requests are skipped with a warning.

    Raises InvalidJoinDateError if the employee has no join date or
    ``as_of`` precedes it.
    """
    policy = policy or LeavePolicy()
    as_of_date = as_date(as_of) if as_of is not None else date.today()

    if employee.join_date is None:
        raise InvalidJoinDateError(f"Employee {employee.id} has no join date")
    join_date = employee.join_date
    if as_of_date < join_date:
        raise InvalidJoinDateError(f"As-of date {as_of_date} is before join date {join_date}")

    leaves = _classify_all(leave_requests, employee.timezone)

    # 1. Lifetime accrual and usage.
    total_accrued = max(0.0, months_elapsed(join_date, as_of_date) * policy.accrual_rate_per_month)
    lifetime = _sum_deductible(leaves, policy, None, as_of_date)
    remaining = max(0.0, total_accrued - lifetime.taken - lifetime.pending)

    # 2. Year-to-date window starts at the later of joining and Jan 1.
    year_start = max(join_date, start_of_year(as_of_date))
    accrued_this_year = max(0.0, months_elapsed(year_start, as_of_date) * policy.accrual_rate_per_month)
    this_year = _sum_deductible(leaves, policy, year_start, as_of_date)

    return LeaveBalance(
        as_of_date=as_of_date,
        total_accrued=total_accrued,
        total_taken=lifetime.taken,
        pending_requests=lifetime.pending,
        remaining_balance=remaining,
        next_accrual_date=start_of_month(add_months(as_of_date, 1)),
        accrued_this_year=accrued_this_year,
        taken_this_year=this_year.taken,
    )


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def get_employee_leave_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    as_of: date | None = None,
) -> LeaveBalance:
    """Load an employee and its leave requests, then compute the balance."""
    employee = await get_employee_or_404(employee_id)
    requests = await get_leave_requests_for_employee(session, employee_id)
    return calculate_leave_balance(employee, requests, as_of, LeavePolicy.from_settings(get_settings()))
