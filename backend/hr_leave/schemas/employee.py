# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import Self
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, model_validator


class UpsertEmployeeRequest(BaseModel):
    """Request body for upserting an employee in the stub service."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=1, max_length=255)
    join_date: date | None = None
    timezone: str = Field(default="UTC", min_length=1)

    @model_validator(mode="after")
    def _validate_timezone(self) -> Self:
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            msg = f"unknown timezone {self.timezone!r}"
            raise ValueError(msg) from None
        return self


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    join_date: date | None
    timezone: str


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
