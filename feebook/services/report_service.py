"""Report Service - transaction ledger, report totals and dashboard figures"""

import datetime as dt
from typing import List, Optional, Tuple

from feebook.core.logging import get_logger
from feebook.models.enums import BANK_METHODS, PaymentMethod, TransactionType
from feebook.schemas.ledger import (
    ConsistencyWarning,
    DashboardSummary,
    FeeEntry,
    RecentPayment,
    ReportTotals,
    Transaction,
    TransactionReport,
)
from feebook.schemas.records import Expense, FeeType, Student
from feebook.services.fee_ledger import FeeLedger
from feebook.utils.keys import VehicleKey, parse_fee_entry_key
from feebook.utils.time import get_today, undated_first

logger = get_logger(__name__)

NOT_AVAILABLE = "N/A"
GROUPED_CATEGORY = "Grouped Payment"
RECENT_LIMIT = 5
DUE_LIMIT = 5


def _income_category(payment, fee_types_by_id: dict) -> Tuple[str, Optional[ConsistencyWarning]]:
    if payment.is_grouped:
        return GROUPED_CATEGORY, None

    try:
        key = parse_fee_entry_key(payment.fee_entry_id)
    except ValueError:
        key = None
    if isinstance(key, VehicleKey):
        return f"Vehicle Fee - {key.month}", None

    fee_type = fee_types_by_id.get(payment.fee_type_id)
    if fee_type is not None:
        return fee_type.name, None
    return NOT_AVAILABLE, ConsistencyWarning(
        code="ORPHANED_FEE_TYPE",
        message=f"Payment {payment.id} references fee type {payment.fee_type_id}, which no longer exists",
    )


def build_transactions(
    payments: list,
    expenses: List[Expense],
    students: List[Student],
    fee_types: List[FeeType],
) -> Tuple[List[Transaction], List[ConsistencyWarning]]:
    """
    Payments (as Income) and expenses (as Expense) in one list, sorted by date.

    The sort is stable, so rows sharing a date keep insertion order with
    payments ahead of expenses. Undated legacy rows come first.
    """
    students_by_id = {s.id: s for s in students}
    fee_types_by_id = {ft.id: ft for ft in fee_types}
    rows: List[Transaction] = []
    warnings: List[ConsistencyWarning] = []

    for payment in payments:
        category, warning = _income_category(payment, fee_types_by_id)
        if warning is not None:
            warnings.append(warning)
        student = students_by_id.get(payment.student_id)
        rows.append(Transaction(
            date=payment.date,
            type=TransactionType.INCOME,
            category=category,
            method=payment.method,
            description=student.name if student else NOT_AVAILABLE,
            amount=payment.amount,
            invoice_or_bill_ref=payment.invoice_id,
            is_grouped_receipt=payment.is_grouped,
        ))

    for expense in expenses:
        rows.append(Transaction(
            date=expense.date,
            type=TransactionType.EXPENSE,
            category=expense.category,
            method=expense.pay_mode,
            description=expense.description,
            amount=expense.amount,
            invoice_or_bill_ref=f"BILL-{expense.id}",
        ))

    if warnings:
        logger.warning("Payments reference deleted fee types", extra={"count": len(warnings)})

    rows.sort(key=lambda t: undated_first(t.date))
    return rows, warnings


def filter_transactions(
    transactions: List[Transaction],
    start_date: Optional[dt.date] = None,
    end_date: Optional[dt.date] = None,
    type: Optional[str] = None,
    method: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Transaction]:
    """
    Inclusive date range, type, method and description/category search.

    Undated rows only survive when no date bound is given.
    """
    needle = (search or "").strip().lower()
    result = []
    for t in transactions:
        if (start_date or end_date) and t.date is None:
            continue
        if start_date and t.date < start_date:
            continue
        if end_date and t.date > end_date:
            continue
        if type and type != "All" and t.type.value != type:
            continue
        if method and method != "All" and t.method.value != method:
            continue
        if needle and needle not in t.description.lower() and needle not in t.category.lower():
            continue
        result.append(t)
    return result


def report_totals(transactions: List[Transaction]) -> ReportTotals:
    # Grouped receipts repeat money already carried by their sub-payments
    income = sum(
        t.amount for t in transactions
        if t.type == TransactionType.INCOME and not t.is_grouped_receipt
    )
    expense = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
    return ReportTotals(total_income=income, total_expense=expense, net=income - expense)


def build_dashboard(
    entries: List[FeeEntry],
    payments: list,
    expenses: List[Expense],
    students: List[Student],
    today: dt.date,
) -> DashboardSummary:
    ledger_payments = [p for p in payments if not p.is_grouped]

    def method_total(items, attr, methods) -> float:
        return sum(i.amount for i in items if getattr(i, attr) in methods)

    cash = (PaymentMethod.CASH,)
    students_by_id = {s.id: s for s in students}
    recent = [
        RecentPayment(
            payment_id=p.id,
            invoice_id=p.invoice_id,
            student_name=students_by_id[p.student_id].name if p.student_id in students_by_id else NOT_AVAILABLE,
            amount=p.amount,
            date=p.date,
        )
        for p in list(reversed(ledger_payments))[:RECENT_LIMIT]
    ]
    due = [
        e for e in entries
        if e.balance > 0 and e.due_date is not None and e.due_date <= today
    ][:DUE_LIMIT]

    return DashboardSummary(
        total_income=sum(e.total_paid for e in entries),
        total_expenses=sum(e.amount for e in expenses),
        cash_balance=method_total(ledger_payments, "method", cash) - method_total(expenses, "pay_mode", cash),
        bank_balance=(
            method_total(ledger_payments, "method", BANK_METHODS)
            - method_total(expenses, "pay_mode", BANK_METHODS)
        ),
        recent_payments=recent,
        due_entries=due,
    )


class ReportService:
    @staticmethod
    async def transactions(
        ledger: FeeLedger,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
        type: Optional[str] = None,
        method: Optional[str] = None,
        search: Optional[str] = None,
    ) -> TransactionReport:
        rows, warnings = build_transactions(
            await ledger.payments(),
            await ledger.expenses(),
            await ledger.students(),
            await ledger.fee_types(),
        )
        rows = filter_transactions(rows, start_date, end_date, type, method, search)
        return TransactionReport(transactions=rows, totals=report_totals(rows), warnings=warnings)

    @staticmethod
    async def dashboard(ledger: FeeLedger, today: Optional[dt.date] = None) -> DashboardSummary:
        return build_dashboard(
            await ledger.fee_entries(force_refresh=True),
            await ledger.payments(),
            await ledger.expenses(),
            await ledger.students(),
            today or get_today(),
        )
