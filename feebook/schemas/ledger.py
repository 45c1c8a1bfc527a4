"""Derived (never persisted) ledger shapes"""

import datetime as dt
from typing import Dict, List, Optional

from pydantic import Field

from feebook.models.enums import FeeStatus, PaymentMethod, TransactionType
from feebook.schemas.base import CamelModel
from feebook.schemas.records import LineItem, SchoolInfo


class ConsistencyWarning(CamelModel):
    """Non-fatal data oddity, reported next to the result it affects"""
    code: str
    message: str


class FeeEntry(CamelModel):
    """One obligation of one student, academic or vehicle"""
    id: str
    student_id: int
    student_name: str
    student_class: str
    student_parent_name: str = ""
    student_whatsapp: str = ""
    student_adm_no: str = ""
    fee_type_id: Optional[int] = None
    fee_type_name: str
    due_date: Optional[dt.date] = None
    total_due: float
    total_paid: float
    balance: float
    status: FeeStatus
    is_vehicle_fee: bool = False
    assignment_id: Optional[int] = None
    month: Optional[str] = None


class StudentFeeSummary(CamelModel):
    student_id: int
    total_due: float = 0
    total_paid: float = 0
    balance: float = 0
    per_fee_type_due: Dict[str, float] = Field(default_factory=dict)


class FeeSheetCell(CamelModel):
    due: float = 0
    balance: float = 0
    settled: bool = False


class FeeSheetRow(CamelModel):
    student_id: int
    student_name: str
    student_class: str
    total_due: float
    total_paid: float
    balance: float
    fees: Dict[str, FeeSheetCell]


class FeeSheetTotals(CamelModel):
    total_due: float = 0
    total_paid: float = 0
    balance: float = 0
    fees: Dict[str, float] = Field(default_factory=dict)


class FeeSheet(CamelModel):
    fee_names: List[str]
    rows: List[FeeSheetRow]
    totals: FeeSheetTotals


class RouteStudentMonth(CamelModel):
    fee: float
    paid: float


class RouteStudentRow(CamelModel):
    assignment_id: int
    student_id: int
    student_name: str
    student_class: str
    # None where the student rode another route (or none) that month
    months: Dict[str, Optional[RouteStudentMonth]]
    total_paid: float


class RouteMonthTotals(CamelModel):
    month: str
    collection: float
    paid_to_driver: float
    balance: float
    is_overpaid: bool = False


class RouteLedger(CamelModel):
    route_id: int
    route_name: str
    driver: str
    students: List[RouteStudentRow]
    months: List[RouteMonthTotals]
    total_collection: float
    total_paid_to_driver: float
    total_balance: float
    warnings: List[ConsistencyWarning] = Field(default_factory=list)


class Transaction(CamelModel):
    date: Optional[dt.date] = None
    type: TransactionType
    category: str
    method: PaymentMethod
    description: str
    amount: float
    invoice_or_bill_ref: str
    is_grouped_receipt: bool = False


class ReportTotals(CamelModel):
    total_income: float = 0
    total_expense: float = 0
    net: float = 0


class TransactionReport(CamelModel):
    transactions: List[Transaction]
    totals: ReportTotals
    warnings: List[ConsistencyWarning] = Field(default_factory=list)


class Invoice(CamelModel):
    payment_id: int
    invoice_id: str
    date: Optional[dt.date] = None
    due_date: Optional[dt.date] = None
    method: PaymentMethod
    school: SchoolInfo
    student_name: str
    student_adm_no: str
    student_class: str
    parent_name: str
    parent_whatsapp: str
    line_items: List[LineItem]
    total_paid: float
    is_paid: bool
    is_grouped: bool


class InvoiceListItem(CamelModel):
    payment_id: int
    invoice_id: str
    student_name: str
    date: Optional[dt.date] = None
    amount: float
    is_grouped: bool


class RecentPayment(CamelModel):
    payment_id: int
    invoice_id: str
    student_name: str
    amount: float
    date: Optional[dt.date] = None


class DashboardSummary(CamelModel):
    total_income: float
    total_expenses: float
    cash_balance: float
    bank_balance: float
    recent_payments: List[RecentPayment]
    due_entries: List[FeeEntry]
