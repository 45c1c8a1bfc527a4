"""Unit tests for fee entry derivation and the ledger cache."""

from datetime import date

import pytest

from feebook.models.enums import Collection, FeeStatus, PaymentMethod
from feebook.schemas.records import (
    GroupedPayment,
    LineItem,
    SinglePayment,
    Student,
    VehicleAssignment,
)
from feebook.services.fee_entry_service import (
    derive_fee_entries,
    derive_status,
    filter_fee_entries,
    paid_by_entry,
    pending_entries_for_student,
)
from feebook.services.payment_service import PaymentService


@pytest.mark.parametrize(
    "paid, balance, expected",
    [
        (0, 5000, FeeStatus.PENDING),
        (0, 0, FeeStatus.PENDING),
        (1, 4999, FeeStatus.PARTIAL),
        (5000, 0, FeeStatus.PAID),
        (6000, -1000, FeeStatus.PAID),
    ],
)
def test_derive_status_boundaries(paid, balance, expected):
    assert derive_status(paid, balance) == expected


def test_paid_by_entry_skips_grouped_receipts():
    payments = [
        SinglePayment(id=1, fee_entry_id="1-1", amount=100, date=date(2025, 6, 1),
                      method=PaymentMethod.CASH, invoice_id="A"),
        SinglePayment(id=2, fee_entry_id="1-1", amount=50, date=date(2025, 6, 2),
                      method=PaymentMethod.CASH, invoice_id="B"),
        GroupedPayment(id=3, fee_entry_id="manual-B", amount=50, date=date(2025, 6, 2),
                       method=PaymentMethod.CASH, invoice_id="B",
                       line_items=[LineItem(description="Tuition", amount=50)]),
    ]
    assert paid_by_entry(payments) == {"1-1": 150}


@pytest.mark.asyncio
async def test_entries_order_academic_then_vehicle(ledger):
    entries = await ledger.fee_entries()
    ids = [e.id for e in entries]
    assert ids[:3] == ["1-1", "2-1", "2-2"]
    assert ids[3:] == [
        "v-1-Jun", "v-1-Jul", "v-1-Aug", "v-1-Sep", "v-1-Oct",
        "v-1-Nov", "v-1-Dec", "v-1-Jan", "v-1-Feb", "v-1-Mar",
    ]


@pytest.mark.asyncio
async def test_section_scoped_fee_type_only_for_its_class(ledger):
    entries = await ledger.fee_entries()
    lab = [e for e in entries if e.fee_type_name == "Lab"]
    assert [e.student_name for e in lab] == ["Ravi"]


@pytest.mark.asyncio
async def test_vehicle_entry_fields(ledger):
    entry = await ledger.find_fee_entry("v-1-Jan")
    assert entry.is_vehicle_fee
    assert entry.fee_type_id is None
    assert entry.fee_type_name == "Vehicle Fee - Jan"
    assert entry.due_date == date(2026, 1, 10)
    assert entry.assignment_id == 1
    assert entry.month == "Jan"
    assert entry.total_due == 1000


@pytest.mark.asyncio
async def test_asha_tuition_moves_pending_partial_paid(ledger):
    entry = await ledger.find_fee_entry("1-1")
    assert (entry.total_due, entry.total_paid, entry.balance) == (5000, 0, 5000)
    assert entry.status == FeeStatus.PENDING
    assert entry.due_date == date(2025, 7, 1)

    await PaymentService.record_single_payment(
        ledger, fee_entry_id="1-1", amount=2000, date=date(2025, 6, 15),
        method=PaymentMethod.CASH, invoice_id="INV-1",
    )
    entry = await ledger.find_fee_entry("1-1")
    assert entry.balance == 3000
    assert entry.status == FeeStatus.PARTIAL

    await PaymentService.record_single_payment(
        ledger, fee_entry_id="1-1", amount=3000, date=date(2025, 7, 1),
        method=PaymentMethod.ONLINE, invoice_id="INV-2",
    )
    entry = await ledger.find_fee_entry("1-1")
    assert entry.balance == 0
    assert entry.status == FeeStatus.PAID


@pytest.mark.asyncio
async def test_zero_fee_months_yield_no_entry(ledger, store):
    assignments = await store.load(Collection.VEHICLE_ASSIGNMENTS)
    assignments[0]["monthlyFees"]["Dec"]["fee"] = 0
    await ledger.save(Collection.VEHICLE_ASSIGNMENTS, assignments)

    ids = {e.id for e in await ledger.fee_entries()}
    assert "v-1-Dec" not in ids
    assert "v-1-Nov" in ids


def test_assignment_without_student_is_skipped(calendar):
    assignment = VehicleAssignment.model_validate(
        {"id": 5, "studentId": 99, "monthlyFees": {"Jun": {"routeId": 1, "fee": 300, "paid": 0}}}
    )
    student = Student(id=1, name="Asha", class_name="Class 1")
    entries = derive_fee_entries([student], [], [], [assignment], calendar)
    assert entries == []


@pytest.mark.asyncio
async def test_balance_invariant_holds_for_every_entry(ledger):
    await PaymentService.record_single_payment(
        ledger, fee_entry_id="2-2", amount=900, date=date(2025, 8, 1),
        method=PaymentMethod.CARD, invoice_id="INV-9",
    )
    for entry in await ledger.fee_entries():
        assert entry.balance == entry.total_due - entry.total_paid
        assert entry.status == derive_status(entry.total_paid, entry.balance)
    assert (await ledger.find_fee_entry("2-2")).balance == -100


@pytest.mark.asyncio
async def test_cache_hit_until_next_write(ledger):
    first = await ledger.fee_entries()
    second = await ledger.fee_entries()
    assert second is first

    forced = await ledger.fee_entries(force_refresh=True)
    assert forced == first

    await ledger.save(Collection.EXPENSES, [])
    third = await ledger.fee_entries()
    assert third is not forced
    assert third == forced


@pytest.mark.asyncio
async def test_filters(ledger):
    entries = await ledger.fee_entries()
    assert {e.student_name for e in filter_fee_entries(entries, class_name="Class 1")} == {"Asha"}
    assert len(filter_fee_entries(entries, class_name="All")) == len(entries)
    assert len(filter_fee_entries(entries, search="rav")) == 12
    assert filter_fee_entries(entries, status="Paid") == []
    assert len(filter_fee_entries(entries, status="Pending", student_id=1)) == 1


@pytest.mark.asyncio
async def test_pending_entries_exclude_paid(ledger):
    await PaymentService.record_single_payment(
        ledger, fee_entry_id="2-2", amount=800, date=date(2025, 8, 1),
        method=PaymentMethod.CASH, invoice_id="INV-3",
    )
    pending = pending_entries_for_student(await ledger.fee_entries(), 2)
    ids = [e.id for e in pending]
    assert "2-2" not in ids
    assert "2-1" in ids
    assert len(ids) == 11
