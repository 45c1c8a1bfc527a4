"""Per-student fee roll-ups (academic fees only)"""

from typing import Dict, List, Optional

from feebook.core.exceptions import NotFoundError
from feebook.schemas.ledger import (
    FeeEntry,
    FeeSheet,
    FeeSheetCell,
    FeeSheetRow,
    FeeSheetTotals,
    StudentFeeSummary,
)
from feebook.schemas.records import FeeType, Student
from feebook.services.fee_ledger import FeeLedger


def distinct_fee_names(fee_types: List[FeeType]) -> List[str]:
    """Fee type names in first-seen order, duplicates dropped"""
    return list(dict.fromkeys(ft.name for ft in fee_types))


def summarize_student(
    entries: List[FeeEntry],
    fee_types: List[FeeType],
    student_id: int,
) -> StudentFeeSummary:
    """
    Totals over a student's academic entries.

    per_fee_type_due carries every fee type name, zero when the student owes
    nothing under it.
    """
    per_fee: Dict[str, float] = {name: 0 for name in distinct_fee_names(fee_types)}
    summary = StudentFeeSummary(student_id=student_id)

    for entry in entries:
        if entry.is_vehicle_fee or entry.student_id != student_id:
            continue
        per_fee[entry.fee_type_name] = per_fee.get(entry.fee_type_name, 0) + entry.total_due
        summary.total_due += entry.total_due
        summary.total_paid += entry.total_paid

    summary.balance = summary.total_due - summary.total_paid
    summary.per_fee_type_due = per_fee
    return summary


def build_fee_sheet(
    students: List[Student],
    fee_types: List[FeeType],
    entries: List[FeeEntry],
    class_name: Optional[str] = None,
) -> FeeSheet:
    fee_names = sorted(distinct_fee_names(fee_types))
    if class_name and class_name != "All":
        students = [s for s in students if s.class_name == class_name]

    totals = FeeSheetTotals(fees={name: 0 for name in fee_names})
    rows = []
    for student in students:
        summary = summarize_student(entries, fee_types, student.id)
        cells = {}
        for name in fee_names:
            matching = [
                e for e in entries
                if not e.is_vehicle_fee and e.student_id == student.id and e.fee_type_name == name
            ]
            due = sum(e.total_due for e in matching)
            balance = sum(e.balance for e in matching)
            cells[name] = FeeSheetCell(due=due, balance=balance, settled=due > 0 and balance <= 0)
            totals.fees[name] += due

        rows.append(FeeSheetRow(
            student_id=student.id,
            student_name=student.name,
            student_class=student.class_name,
            total_due=summary.total_due,
            total_paid=summary.total_paid,
            balance=summary.balance,
            fees=cells,
        ))
        totals.total_due += summary.total_due
        totals.total_paid += summary.total_paid
        totals.balance += summary.balance

    return FeeSheet(fee_names=fee_names, rows=rows, totals=totals)


class SummaryService:
    @staticmethod
    async def summarize(ledger: FeeLedger, student_id: int) -> StudentFeeSummary:
        if await ledger.student(student_id) is None:
            raise NotFoundError("Student", student_id)
        return summarize_student(
            await ledger.fee_entries(), await ledger.fee_types(), student_id
        )

    @staticmethod
    async def fee_sheet(ledger: FeeLedger, class_name: Optional[str] = None) -> FeeSheet:
        return build_fee_sheet(
            await ledger.students(),
            await ledger.fee_types(),
            await ledger.fee_entries(),
            class_name,
        )
