"""Leave request classification: validation and deductible-day quantities."""

# ruff: noqa: TC003
from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from hr_leave.exceptions import MalformedLeaveRequestError
from hr_leave.models.enums import LeaveStatus, LeaveType
from hr_leave.services.dates import as_date, day_span

if TYPE_CHECKING:
    from hr_leave.config import Settings


class LeaveRequestLike(Protocol):
    """Read-only view of a leave request; ORM rows satisfy it."""

    id: uuid.UUID
    type: str
    status: str
    start_date: date | datetime
    end_date: date | datetime


@dataclass(frozen=True)
class LeaveTypeRule:
    """How a leave type converts into days.

    ``fixed_days`` wins over the date span when set (a half-day is always
    half a day); otherwise the inclusive span is scaled by ``multiplier``.
    """

    fixed_days: float | None = None
    multiplier: float = 1.0


DEFAULT_LEAVE_TYPE_RULES: Mapping[LeaveType, LeaveTypeRule] = MappingProxyType(
    {
        LeaveType.ANNUAL: LeaveTypeRule(),
        LeaveType.SICK: LeaveTypeRule(),
        LeaveType.PERSONAL: LeaveTypeRule(),
        LeaveType.HALFDAY: LeaveTypeRule(fixed_days=0.5),
        LeaveType.UNPAID: LeaveTypeRule(),
        LeaveType.OTHER: LeaveTypeRule(),
        LeaveType.WORK_FROM_HOME: LeaveTypeRule(),
    }
)

DEFAULT_DEDUCTIBLE_TYPES: frozenset[LeaveType] = frozenset(
    {LeaveType.ANNUAL, LeaveType.SICK, LeaveType.PERSONAL, LeaveType.HALFDAY}
)


@dataclass(frozen=True)
class LeavePolicy:
    """Accrual rate, deductible types and per-type day rules."""

    accrual_rate_per_month: float = 1.5
    deductible_types: frozenset[LeaveType] = DEFAULT_DEDUCTIBLE_TYPES
    rules: Mapping[LeaveType, LeaveTypeRule] = field(default_factory=lambda: DEFAULT_LEAVE_TYPE_RULES)
    monthly_paid_leave_limit: float = 1.5

    @classmethod
    def from_settings(cls, settings: Settings) -> LeavePolicy:
        """Build a policy from application settings."""
        return cls(
            accrual_rate_per_month=settings.accrual_rate_per_month,
            deductible_types=frozenset(LeaveType(t) for t in settings.deductible_leave_types),
            monthly_paid_leave_limit=settings.monthly_paid_leave_limit,
        )

    def rule_for(self, leave_type: LeaveType) -> LeaveTypeRule:
        return self.rules.get(leave_type, LeaveTypeRule())

    def is_deductible(self, leave_type: LeaveType) -> bool:
        return leave_type in self.deductible_types


@dataclass(frozen=True)
class ClassifiedLeave:
    """A validated leave request with closed type and status values."""

    request_id: uuid.UUID
    leave_type: LeaveType
    status: LeaveStatus
    start_date: date
    end_date: date


def classify_leave_request(request: LeaveRequestLike, tz: str = "UTC") -> ClassifiedLeave:
    """Validate a raw request. Raises MalformedLeaveRequestError.

    Stored timestamps are read as calendar dates in the employee's time
    zone ``tz``.
    """
    try:
        leave_type = LeaveType(request.type)
    except ValueError:
        raise MalformedLeaveRequestError(f"Unknown leave type {request.type!r}", request_id=request.id) from None
    try:
        status = LeaveStatus(request.status)
    except ValueError:
        raise MalformedLeaveRequestError(f"Unknown leave status {request.status!r}", request_id=request.id) from None

    start = as_date(request.start_date, tz)
    end = as_date(request.end_date, tz)
    if end < start:
        raise MalformedLeaveRequestError(f"End date {end} is before start date {start}", request_id=request.id)

    return ClassifiedLeave(
        request_id=request.id,
        leave_type=leave_type,
        status=status,
        start_date=start,
        end_date=end,
    )


def deductible_days(leave: ClassifiedLeave, policy: LeavePolicy) -> float:
    """Day quantity of a request under the policy's type rules.

    Does not filter by date or deductibility; callers decide which
    requests count.
    """
    rule = policy.rule_for(leave.leave_type)
    if rule.fixed_days is not None:
        return rule.fixed_days
    return day_span(leave.start_date, leave.end_date) * rule.multiplier
