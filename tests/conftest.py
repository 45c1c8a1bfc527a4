"""Shared pytest fixtures for unit and integration tests."""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient

from feebook.api.deps import get_record_store
from feebook.config import settings
from feebook.main import app
from feebook.models.enums import ACADEMIC_MONTHS, DEFAULT_CLASSES, Collection
from feebook.services.fee_ledger import FeeLedger
from feebook.services.record_store import InMemoryRecordStore
from feebook.utils.calendar import AcademicCalendar


def monthly_fees(route_id, fee, paid=0):
    """Stored monthlyFees mapping with the same route/fee for every month."""
    return {m: {"routeId": route_id, "fee": fee, "paid": paid} for m in ACADEMIC_MONTHS}


def school_records() -> dict:
    """
    Small school used across tests.

    Asha (Class 1) owes Tuition only. Ravi (Class 2) owes Tuition and Lab
    and rides route 1 at 1000 a month.
    """
    return {
        Collection.CLASSES: list(DEFAULT_CLASSES),
        Collection.STUDENTS: [
            {"id": 1, "name": "Asha", "admNo": "A-001", "class": "Class 1",
             "parentName": "Meena", "whatsapp": "9000000001", "contact": ""},
            {"id": 2, "name": "Ravi", "admNo": "A-002", "class": "Class 2",
             "parentName": "Suresh", "whatsapp": "9000000002", "contact": ""},
        ],
        Collection.FEE_TYPES: [
            {"id": 1, "name": "Tuition", "section": "All", "amount": 5000,
             "dueDate": "2025-07-01", "remindDate": ""},
            {"id": 2, "name": "Lab", "section": "Class 2", "amount": 800,
             "dueDate": "2025-08-15", "remindDate": None},
        ],
        Collection.ROUTES: [
            {"id": 1, "name": "North Loop", "driver": "Mohan"},
            {"id": 2, "name": "South Loop", "driver": "Iqbal"},
        ],
        Collection.VEHICLE_ASSIGNMENTS: [
            {"id": 1, "studentId": 2, "monthlyFees": monthly_fees(1, 1000)},
        ],
        Collection.SCHOOL_INFO: [
            {"name": "Green Valley School", "address": "12 Hill Road", "phone": "080-1234",
             "email": "office@gvs.example", "whatsapp": "", "website": ""},
        ],
    }


@pytest.fixture
def calendar() -> AcademicCalendar:
    return AcademicCalendar("2025-2026", due_day=10)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore(school_records())


@pytest.fixture
def ledger(store: InMemoryRecordStore, calendar: AcademicCalendar) -> FeeLedger:
    return FeeLedger(store, calendar)


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def async_client(store: InMemoryRecordStore, api_base: str):
    """Async HTTP client against the app, backed by the in-memory store."""
    app.dependency_overrides[get_record_store] = lambda: store
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()
    app.dependency_overrides.clear()
