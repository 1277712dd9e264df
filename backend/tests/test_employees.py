"""Tests for the employee service stub and its API (upsert, get, list)."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

import pytest

from hr_leave.services.employee import (
    EmployeeInfo,
    EmployeeService,
    InMemoryEmployeeService,
    get_employee_service,
    set_employee_service,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from httpx import AsyncClient

EMPLOYEE_ID = uuid.uuid4()
EMPLOYEES_URL = "/employees"


@pytest.fixture(autouse=True)
def _reset_employee_service() -> Iterator[None]:
    set_employee_service(InMemoryEmployeeService())
    yield
    set_employee_service(InMemoryEmployeeService())


def _employee_payload(
    first_name: str = "John",
    last_name: str = "Doe",
    email: str = "john@example.com",
    join_date: str | None = "2024-01-01",
) -> dict:
    return {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "join_date": join_date,
    }


# ---------------------------------------------------------------------------
# InMemoryEmployeeService
# ---------------------------------------------------------------------------


async def test_service_get_not_found() -> None:
    svc = InMemoryEmployeeService()
    assert await svc.get_employee(uuid.uuid4()) is None


async def test_service_seed_and_get() -> None:
    svc = InMemoryEmployeeService()
    emp = EmployeeInfo(id=EMPLOYEE_ID, first_name="Jane", last_name="Doe", email="jane@example.com")
    svc.seed(emp)
    result = await svc.get_employee(EMPLOYEE_ID)
    assert result is not None
    assert result.id == EMPLOYEE_ID
    assert result.join_date is None


async def test_service_list() -> None:
    svc = InMemoryEmployeeService()
    assert await svc.list_employees() == []
    svc.seed(EmployeeInfo(id=uuid.uuid4(), first_name="A", last_name="B", email="a@example.com"))
    svc.seed(EmployeeInfo(id=uuid.uuid4(), first_name="C", last_name="D", email="c@example.com"))
    assert len(await svc.list_employees()) == 2


def test_in_memory_service_satisfies_protocol() -> None:
    assert isinstance(get_employee_service(), EmployeeService)


# ---------------------------------------------------------------------------
# PUT /employees/{employee_id}
# ---------------------------------------------------------------------------


async def test_upsert_employee(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=_employee_payload())
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == str(EMPLOYEE_ID)
    assert data["first_name"] == "John"
    assert data["join_date"] == "2024-01-01"

    stored = await get_employee_service().get_employee(EMPLOYEE_ID)
    assert stored is not None
    assert stored.join_date == date(2024, 1, 1)


async def test_upsert_overwrites_existing(async_client: AsyncClient) -> None:
    await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=_employee_payload())
    resp = await async_client.put(
        f"{EMPLOYEES_URL}/{EMPLOYEE_ID}",
        json=_employee_payload(first_name="Johnny", join_date="2023-05-01"),
    )
    assert resp.status_code == 200
    assert resp.json()["first_name"] == "Johnny"
    assert resp.json()["join_date"] == "2023-05-01"


async def test_upsert_without_join_date(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=_employee_payload(join_date=None))
    assert resp.status_code == 200
    assert resp.json()["join_date"] is None


async def test_upsert_timezone(async_client: AsyncClient) -> None:
    payload = {**_employee_payload(), "timezone": "Asia/Kolkata"}
    resp = await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=payload)
    assert resp.status_code == 200
    assert resp.json()["timezone"] == "Asia/Kolkata"

    stored = await get_employee_service().get_employee(EMPLOYEE_ID)
    assert stored is not None
    assert stored.timezone == "Asia/Kolkata"


async def test_upsert_timezone_defaults_to_utc(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=_employee_payload())
    assert resp.json()["timezone"] == "UTC"


async def test_upsert_rejects_unknown_timezone(async_client: AsyncClient) -> None:
    payload = {**_employee_payload(), "timezone": "Mars/Olympus_Mons"}
    resp = await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=payload)
    assert resp.status_code == 422
    assert resp.json()["error"] == "ValidationError"


async def test_upsert_rejects_empty_name(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=_employee_payload(first_name=""))
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# GET /employees/{employee_id}, GET /employees
# ---------------------------------------------------------------------------


async def test_get_employee(async_client: AsyncClient) -> None:
    await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=_employee_payload())
    resp = await async_client.get(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}")
    assert resp.status_code == 200
    assert resp.json()["email"] == "john@example.com"


async def test_get_employee_not_found(async_client: AsyncClient) -> None:
    resp = await async_client.get(f"{EMPLOYEES_URL}/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "AppError"


async def test_list_employees(async_client: AsyncClient) -> None:
    await async_client.put(f"{EMPLOYEES_URL}/{uuid.uuid4()}", json=_employee_payload(email="a@example.com"))
    await async_client.put(f"{EMPLOYEES_URL}/{uuid.uuid4()}", json=_employee_payload(email="b@example.com"))
    resp = await async_client.get(EMPLOYEES_URL)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert {e["email"] for e in data["items"]} == {"a@example.com", "b@example.com"}


async def test_balance_for_employee_created_over_api(async_client: AsyncClient) -> None:
    await async_client.put(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}", json=_employee_payload(join_date="2024-01-01"))
    resp = await async_client.get(f"{EMPLOYEES_URL}/{EMPLOYEE_ID}/leave-balance", params={"as_of": "2024-07-01"})
    assert resp.status_code == 200
    assert resp.json()["remaining_balance"] == 9.0
