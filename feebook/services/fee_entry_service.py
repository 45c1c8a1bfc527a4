"""Fee Entry derivation.

Joins students, fee types, vehicle assignments and payments into one list of
fee entries with paid/balance/status. Pure functions: callers supply the
records and own any caching (see FeeLedger).
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from feebook.models.enums import FeeStatus
from feebook.schemas.ledger import FeeEntry
from feebook.schemas.records import FeeType, Student, VehicleAssignment
from feebook.utils.calendar import AcademicCalendar
from feebook.utils.keys import AcademicKey, VehicleKey, is_grouped_key

ALL_FILTER = "All"


def derive_status(total_paid: float, balance: float) -> FeeStatus:
    if total_paid == 0:
        return FeeStatus.PENDING
    if balance <= 0:
        return FeeStatus.PAID
    return FeeStatus.PARTIAL


def paid_by_entry(payments: Iterable) -> Dict[str, float]:
    """Sum of payment amounts per fee entry key, grouped receipts excluded"""
    totals: Dict[str, float] = defaultdict(float)
    for payment in payments:
        if payment.is_grouped or is_grouped_key(payment.fee_entry_id):
            continue
        totals[payment.fee_entry_id] += payment.amount
    return totals


def _student_fields(student: Student) -> dict:
    return {
        "student_id": student.id,
        "student_name": student.name,
        "student_class": student.class_name,
        "student_parent_name": student.parent_name,
        "student_whatsapp": student.whatsapp,
        "student_adm_no": student.adm_no,
    }


def _entry(key: str, student: Student, total_due: float, total_paid: float, **fields) -> FeeEntry:
    balance = total_due - total_paid
    return FeeEntry(
        id=key,
        total_due=total_due,
        total_paid=total_paid,
        balance=balance,
        status=derive_status(total_paid, balance),
        **_student_fields(student),
        **fields,
    )


def derive_fee_entries(
    students: List[Student],
    fee_types: List[FeeType],
    payments: list,
    assignments: List[VehicleAssignment],
    calendar: AcademicCalendar,
) -> List[FeeEntry]:
    """
    Academic entries first (student order, then fee type order), followed by
    vehicle entries (assignment order, then academic month order).

    A vehicle month only yields an entry while its fee is positive, and
    assignments whose student no longer exists yield nothing.
    """
    paid = paid_by_entry(payments)
    entries: List[FeeEntry] = []

    for student in students:
        for fee_type in fee_types:
            if not fee_type.applies_to(student.class_name):
                continue
            key = str(AcademicKey(student_id=student.id, fee_type_id=fee_type.id))
            entries.append(_entry(
                key, student, fee_type.amount, paid.get(key, 0),
                fee_type_id=fee_type.id,
                fee_type_name=fee_type.name,
                due_date=fee_type.due_date,
            ))

    students_by_id = {s.id: s for s in students}
    for assignment in assignments:
        student = students_by_id.get(assignment.student_id)
        if student is None:
            continue
        for month in calendar.months:
            month_fee = assignment.monthly_fees.get(month)
            if month_fee is None or month_fee.fee <= 0:
                continue
            key = str(VehicleKey(assignment_id=assignment.id, month=month))
            entries.append(_entry(
                key, student, month_fee.fee, paid.get(key, 0),
                fee_type_name=f"Vehicle Fee - {month}",
                due_date=calendar.due_date(month),
                is_vehicle_fee=True,
                assignment_id=assignment.id,
                month=month,
            ))

    return entries


def filter_fee_entries(
    entries: List[FeeEntry],
    class_name: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    student_id: Optional[int] = None,
) -> List[FeeEntry]:
    """Optional class / status / student-name filters; "All" disables a filter"""
    needle = (search or "").strip().lower()
    result = []
    for entry in entries:
        if class_name and class_name != ALL_FILTER and entry.student_class != class_name:
            continue
        if status and status != ALL_FILTER and entry.status.value != status:
            continue
        if needle and needle not in entry.student_name.lower():
            continue
        if student_id is not None and entry.student_id != student_id:
            continue
        result.append(entry)
    return result


def pending_entries_for_student(entries: List[FeeEntry], student_id: int) -> List[FeeEntry]:
    """Entries still selectable for a grouped payment"""
    return [
        e for e in entries
        if e.student_id == student_id and e.status != FeeStatus.PAID
    ]
