from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Category of a leave request."""

    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    HALFDAY = "halfday"
    UNPAID = "unpaid"
    OTHER = "other"
    WORK_FROM_HOME = "workfromhome"


class LeaveStatus(enum.StrEnum):
    """Approval state of a leave request, as observed by the engine."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
