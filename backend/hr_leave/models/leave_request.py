# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from hr_leave.models.base import TimestampMixin, UUIDBase
from hr_leave.models.enums import LeaveStatus


class LeaveRequest(UUIDBase, TimestampMixin, table=True):
    """An employee's leave request as recorded by the back office.

    Type and status are kept as raw strings; the classifier is responsible
    for turning them into ``LeaveType``/``LeaveStatus`` values.
    """

    __tablename__ = "leave_request"
    __table_args__ = (sa.Index("ix_leave_request_employee_start", "employee_id", "start_date"),)

    employee_id: uuid.UUID = Field(index=True)
    type: str = Field(max_length=50)
    status: str = Field(default=LeaveStatus.PENDING, max_length=50, index=True)
    start_date: datetime = Field(sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    end_date: datetime = Field(sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    reason: str | None = None
