from sqlmodel import SQLModel

from hr_leave.models.base import TimestampMixin, UUIDBase
from hr_leave.models.enums import LeaveStatus, LeaveType
from hr_leave.models.leave_request import LeaveRequest

__all__ = [
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
