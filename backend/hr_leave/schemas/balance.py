# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class LeaveBalance(BaseModel):
    """Leave balance snapshot for one employee as of a date. All amounts are days."""

    as_of_date: date
    total_accrued: float
    total_taken: float = Field(description="Approved, deductible leave started on or before as_of_date")
    pending_requests: float = Field(description="Pending, deductible leave held against the balance")
    remaining_balance: float = Field(ge=0)
    next_accrual_date: date
    accrued_this_year: float
    taken_this_year: float
