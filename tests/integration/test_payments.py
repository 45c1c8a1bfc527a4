"""Integration tests: fee entries, payments and invoices."""

import pytest
from httpx import AsyncClient

from feebook.api.deps import get_record_store
from feebook.core.exceptions import ConflictError
from feebook.main import app
from feebook.models.enums import Collection
from feebook.services.record_store import InMemoryRecordStore


@pytest.mark.asyncio
async def test_fee_entries_listing(async_client: AsyncClient, api_base: str):
    resp = await async_client.get(f"{api_base}/fee-entries")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 13
    first = data[0]
    assert first["id"] == "1-1"
    assert first["studentName"] == "Asha"
    assert first["status"] == "Pending"
    assert first["balance"] == 5000


@pytest.mark.asyncio
async def test_fee_entries_filtered_by_class(async_client: AsyncClient, api_base: str):
    resp = await async_client.get(f"{api_base}/fee-entries", params={"class": "Class 1"})
    assert resp.status_code == 200
    assert [e["id"] for e in resp.json()["data"]] == ["1-1"]


@pytest.mark.asyncio
async def test_single_payment_flow(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/payments",
        json={"feeEntryId": "1-1", "amount": 2000, "date": "2025-06-15",
              "method": "Cash", "invoiceId": "INV-1"},
    )
    assert resp.status_code == 200, resp.text
    payment = resp.json()["data"]
    assert payment["id"] == 1
    assert payment["invoiceId"] == "INV-1"

    resp = await async_client.get(f"{api_base}/fee-entries/1-1")
    entry = resp.json()["data"]
    assert entry["balance"] == 3000
    assert entry["status"] == "Partial"

    resp = await async_client.get(f"{api_base}/fee-entries/1-1/invoice")
    assert resp.status_code == 200
    invoice = resp.json()["data"]
    assert invoice["invoiceId"] == "INV-1"
    assert invoice["lineItems"] == [{"description": "Tuition", "amount": 2000.0}]
    assert invoice["school"]["name"] == "Green Valley School"


@pytest.mark.asyncio
async def test_payment_without_invoice_is_rejected(async_client: AsyncClient, api_base: str, store):
    resp = await async_client.post(
        f"{api_base}/payments",
        json={"feeEntryId": "1-1", "amount": 100, "date": "2025-06-15", "invoiceId": " "},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "payments" not in store.dump()


@pytest.mark.asyncio
async def test_payment_for_unknown_entry(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/payments",
        json={"feeEntryId": "5-5", "amount": 100, "date": "2025-06-15", "invoiceId": "X"},
    )
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_payment_schema_validation(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/payments",
        json={"feeEntryId": "1-1", "amount": -5, "date": "2025-06-15", "invoiceId": "X"},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_grouped_payment_flow(async_client: AsyncClient, api_base: str):
    resp = await async_client.get(f"{api_base}/students/2/pending-fees")
    assert resp.status_code == 200
    pending = [e["id"] for e in resp.json()["data"]]
    assert pending[:3] == ["2-1", "2-2", "v-1-Jun"]

    resp = await async_client.post(
        f"{api_base}/payments/grouped",
        json={"studentId": 2, "feeEntryIds": ["2-2", "v-1-Jun"], "date": "2025-07-01",
              "method": "Online", "invoiceId": "G-1"},
    )
    assert resp.status_code == 200, resp.text
    master = resp.json()["data"]
    assert master["feeEntryId"] == "manual-G-1"
    assert master["amount"] == 1800
    assert [li["description"] for li in master["lineItems"]] == ["Lab", "Vehicle Fee - Jun"]

    resp = await async_client.get(f"{api_base}/students/2/pending-fees")
    pending = [e["id"] for e in resp.json()["data"]]
    assert "2-2" not in pending
    assert "v-1-Jun" not in pending

    resp = await async_client.get(f"{api_base}/invoices/{master['id']}")
    invoice = resp.json()["data"]
    assert invoice["isGrouped"] is True
    assert invoice["totalPaid"] == 1800

    resp = await async_client.get(f"{api_base}/invoices", params={"search": "g-1"})
    assert [i["paymentId"] for i in resp.json()["data"]] == [3, 2, 1]


@pytest.mark.asyncio
async def test_grouped_payment_needs_selection(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/payments/grouped",
        json={"studentId": 2, "feeEntryIds": [], "date": "2025-07-01", "invoiceId": "G-1"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Please select at least one fee to pay."


class ConflictingStore(InMemoryRecordStore):
    """Another writer always got there first"""

    async def save(self, name, records):
        raise ConflictError(name.value if isinstance(name, Collection) else name)


@pytest.mark.asyncio
async def test_write_conflict_is_409(async_client: AsyncClient, api_base: str, store):
    app.dependency_overrides[get_record_store] = lambda: ConflictingStore(store.dump())
    resp = await async_client.post(
        f"{api_base}/payments",
        json={"feeEntryId": "1-1", "amount": 100, "date": "2025-06-15",
              "method": "Cash", "invoiceId": "INV-9"},
    )
    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "WRITE_CONFLICT"
    assert "payments" in body["error"]["message"]
