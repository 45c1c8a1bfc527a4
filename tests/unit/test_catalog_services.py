"""Unit tests for students, fee types, classes, expenses and school details."""

from datetime import date

import pytest

from feebook.core.exceptions import NotFoundError, ValidationError
from feebook.models.enums import DEFAULT_CLASSES, PaymentMethod
from feebook.schemas.catalog import (
    ExpenseCreate,
    ExpenseUpdate,
    FeeTypeCreate,
    StudentCreate,
    StudentUpdate,
)
from feebook.schemas.records import SchoolInfo
from feebook.services.expense_service import ExpenseService
from feebook.services.fee_ledger import FeeLedger
from feebook.services.fee_type_service import FeeTypeService
from feebook.services.payment_service import PaymentService
from feebook.services.record_store import InMemoryRecordStore
from feebook.services.school_service import SchoolService
from feebook.services.student_service import StudentService


@pytest.mark.asyncio
async def test_classes_seeded_on_first_use(calendar):
    store = InMemoryRecordStore()
    classes = await SchoolService.list_classes(FeeLedger(store, calendar))
    assert classes == sorted(DEFAULT_CLASSES)
    assert store.dump()["classes"] == list(DEFAULT_CLASSES)


@pytest.mark.asyncio
async def test_add_and_delete_class(ledger):
    classes = await SchoolService.add_class(ledger, "  Class 6 ")
    assert "Class 6" in classes
    assert await SchoolService.add_class(ledger, "Class 6") == classes

    with pytest.raises(ValidationError):
        await SchoolService.add_class(ledger, "   ")

    classes = await SchoolService.delete_class(ledger, "Class 6")
    assert "Class 6" not in classes
    with pytest.raises(NotFoundError):
        await SchoolService.delete_class(ledger, "Class 6")


@pytest.mark.asyncio
async def test_create_student_in_known_class(ledger):
    student = await StudentService.create_student(
        ledger, StudentCreate.model_validate({"name": "Kiran", "class": "UKG", "parentName": "Devi"})
    )
    assert student.id == 3
    assert student.class_name == "UKG"
    # Tuition applies to every class
    assert await ledger.find_fee_entry("3-1") is not None


@pytest.mark.asyncio
async def test_create_student_in_unknown_class(ledger):
    with pytest.raises(ValidationError):
        await StudentService.create_student(
            ledger, StudentCreate.model_validate({"name": "Kiran", "class": "Class 12"})
        )


@pytest.mark.asyncio
async def test_update_student(ledger):
    student = await StudentService.update_student(
        ledger, 1, StudentUpdate.model_validate({"name": "Asha R", "class": "Class 2"})
    )
    assert student.class_name == "Class 2"
    assert (await ledger.find_fee_entry("1-2")).fee_type_name == "Lab"

    with pytest.raises(NotFoundError):
        await StudentService.update_student(
            ledger, 99, StudentUpdate.model_validate({"name": "X", "class": "LKG"})
        )


@pytest.mark.asyncio
async def test_list_students_by_class(ledger):
    assert [s.name for s in await StudentService.list_students(ledger, "Class 2")] == ["Ravi"]
    assert len(await StudentService.list_students(ledger, "All")) == 2


@pytest.mark.asyncio
async def test_delete_student_cascades(ledger):
    await PaymentService.record_single_payment(
        ledger, fee_entry_id="2-1", amount=100, date=date(2025, 7, 1),
        method=PaymentMethod.CASH, invoice_id="INV-1",
    )
    await PaymentService.record_single_payment(
        ledger, fee_entry_id="1-1", amount=100, date=date(2025, 7, 1),
        method=PaymentMethod.CASH, invoice_id="INV-2",
    )

    await StudentService.delete_student(ledger, 2)

    assert [s.id for s in await ledger.students()] == [1]
    assert [p.student_id for p in await ledger.payments()] == [1]
    assert await ledger.vehicle_assignments() == []
    assert all(e.student_id != 2 for e in await ledger.fee_entries())

    with pytest.raises(NotFoundError):
        await StudentService.delete_student(ledger, 2)


@pytest.mark.asyncio
async def test_fee_type_for_unknown_class_is_rejected(ledger):
    with pytest.raises(ValidationError):
        await FeeTypeService.create_fee_type(
            ledger, FeeTypeCreate(name="Sports", section="Class 12", amount=300)
        )


@pytest.mark.asyncio
async def test_fee_type_delete_keeps_payments(ledger):
    await PaymentService.record_single_payment(
        ledger, fee_entry_id="2-2", amount=800, date=date(2025, 7, 1),
        method=PaymentMethod.CASH, invoice_id="INV-1",
    )
    await FeeTypeService.delete_fee_type(ledger, 2)

    assert len(await ledger.payments()) == 1
    assert await ledger.find_fee_entry("2-2") is None
    with pytest.raises(NotFoundError):
        await FeeTypeService.get_fee_type(ledger, 2)


@pytest.mark.asyncio
async def test_new_fee_type_creates_entries(ledger):
    fee_type = await FeeTypeService.create_fee_type(
        ledger, FeeTypeCreate(name="Books", section="Class 1", amount=1200, due_date=date(2025, 6, 30))
    )
    entry = await ledger.find_fee_entry(f"1-{fee_type.id}")
    assert entry.total_due == 1200
    assert await ledger.find_fee_entry(f"2-{fee_type.id}") is None


@pytest.mark.asyncio
async def test_expense_crud(ledger):
    expense = await ExpenseService.create_expense(ledger, ExpenseCreate(
        date=date(2025, 6, 1), category="Fuel", amount=450, pay_mode=PaymentMethod.CASH,
    ))
    assert expense.id == 1

    updated = await ExpenseService.update_expense(ledger, 1, ExpenseUpdate(
        date=date(2025, 6, 2), category="Fuel", description="Diesel", amount=500,
        pay_mode=PaymentMethod.ONLINE,
    ))
    assert updated.amount == 500
    assert (await ledger.expenses())[0].pay_mode == PaymentMethod.ONLINE

    await ExpenseService.delete_expense(ledger, 1)
    assert await ledger.expenses() == []
    with pytest.raises(NotFoundError):
        await ExpenseService.delete_expense(ledger, 1)


@pytest.mark.asyncio
async def test_school_info_round_trip(calendar):
    ledger = FeeLedger(InMemoryRecordStore(), calendar)
    assert (await SchoolService.get_school_info(ledger)).name == ""

    await SchoolService.update_school_info(ledger, SchoolInfo(name="Sunrise", phone="123"))
    info = await SchoolService.get_school_info(ledger)
    assert info.name == "Sunrise"
    assert info.phone == "123"
