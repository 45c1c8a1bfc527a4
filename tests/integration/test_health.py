"""Integration tests: Health and root endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from feebook.main import app


@pytest.mark.asyncio
async def test_health():
    """Health endpoint at /health."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["academic_year"] == "2025-2026"


@pytest.mark.asyncio
async def test_root_and_request_id():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/", headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time" in resp.headers


def _data_variants(spec: dict, path: str) -> list:
    """Schemas allowed for ``data`` in the 200 envelope of GET ``path``"""
    content = spec["paths"][path]["get"]["responses"]["200"]["content"]
    ref = content["application/json"]["schema"]["$ref"]
    envelope = spec["components"]["schemas"][ref.rsplit("/", 1)[-1]]
    data = envelope["properties"]["data"]
    return data.get("anyOf", [data])


@pytest.mark.asyncio
async def test_openapi_documents_envelope_payloads():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/openapi.json")
    assert resp.status_code == 200
    spec = resp.json()

    assert {"type": "array", "items": {"$ref": "#/components/schemas/Student"}} in _data_variants(
        spec, "/api/v1/students"
    )
    assert {"$ref": "#/components/schemas/FeeEntry"} in _data_variants(
        spec, "/api/v1/fee-entries/{fee_entry_id}"
    )
    assert {"$ref": "#/components/schemas/TransactionReport"} in _data_variants(
        spec, "/api/v1/reports/transactions"
    )
