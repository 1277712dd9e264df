# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from hr_leave.models.enums import LeaveStatus, LeaveType

# ---------------------------------------------------------------------------
# Monthly apportionment
# ---------------------------------------------------------------------------


class MonthAllocation(BaseModel):
    """Days of a single leave request that fall in one month."""

    request_id: uuid.UUID
    leave_type: LeaveType
    status: LeaveStatus
    days: float


class LeaveTypeStats(BaseModel):
    """Per-type totals within a month."""

    days: float = 0
    request_count: int = 0


class MonthlyApportionment(BaseModel):
    """Leave activity apportioned to one calendar month."""

    month_key: str  # e.g. "March 2025"
    year: int
    month: int
    allocations: list[MonthAllocation] = Field(default_factory=list)
    total_days: float = 0
    approved_days: float = 0
    pending_days: float = 0
    rejected_days: float = 0
    total_requests: int = 0
    leave_type_stats: dict[str, LeaveTypeStats] = Field(default_factory=dict)


class DataQualityWarning(BaseModel):
    """A leave request the report could not apportion."""

    request_id: uuid.UUID
    reason: str


class MonthlyLeaveReport(BaseModel):
    """Months ordered most recent first, plus skipped-record warnings."""

    months: list[MonthlyApportionment]
    warnings: list[DataQualityWarning] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Paid leave limit check
# ---------------------------------------------------------------------------


class MonthlyLimitAnalysis(BaseModel):
    """Paid-leave usage for one month touched by a prospective request."""

    month_key: str
    current_usage: float
    request_days_in_month: float
    new_total: float
    limit: float
    remaining: float
    would_exceed: bool


class PaidLeaveLimitCheck(BaseModel):
    """Whether a prospective request stays within the monthly paid-leave limit."""

    would_exceed: bool
    will_be_paid: bool
    total_request_days: float
    per_month: list[MonthlyLimitAnalysis] = Field(default_factory=list)
