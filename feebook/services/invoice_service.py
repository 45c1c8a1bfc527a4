"""Invoice Service - rebuilds printable receipts from stored payments"""

from typing import List, Optional

from feebook.core.exceptions import NotFoundError
from feebook.schemas.ledger import Invoice, InvoiceListItem
from feebook.schemas.records import LineItem
from feebook.services.fee_ledger import FeeLedger
from feebook.services.payment_service import PaymentService
from feebook.utils.time import undated_first

NOT_AVAILABLE = "N/A"


def _student_fields(student) -> dict:
    if student is None:
        return {
            "student_name": NOT_AVAILABLE,
            "student_adm_no": NOT_AVAILABLE,
            "student_class": NOT_AVAILABLE,
            "parent_name": NOT_AVAILABLE,
            "parent_whatsapp": "",
        }
    return {
        "student_name": student.name,
        "student_adm_no": student.adm_no,
        "student_class": student.class_name,
        "parent_name": student.parent_name,
        "parent_whatsapp": student.whatsapp,
    }


class InvoiceService:
    @staticmethod
    async def build_invoice(ledger: FeeLedger, payment_id: int) -> Invoice:
        payment = await PaymentService.get_payment(ledger, payment_id)
        school = await ledger.school_info()

        if payment.is_grouped:
            student = await ledger.student(payment.student_id) if payment.student_id else None
            return Invoice(
                payment_id=payment.id,
                invoice_id=payment.invoice_id,
                date=payment.date,
                due_date=None,
                method=payment.method,
                school=school,
                **_student_fields(student),
                line_items=payment.line_items,
                total_paid=payment.amount,
                is_paid=True,
                is_grouped=True,
            )

        entry = await ledger.find_fee_entry(payment.fee_entry_id)
        if entry is None:
            # Fee type or student removed since; keep the receipt printable
            student = await ledger.student(payment.student_id) if payment.student_id else None
            return Invoice(
                payment_id=payment.id,
                invoice_id=payment.invoice_id,
                date=payment.date,
                method=payment.method,
                school=school,
                **_student_fields(student),
                line_items=[LineItem(description=NOT_AVAILABLE, amount=payment.amount)],
                total_paid=payment.amount,
                is_paid=False,
                is_grouped=False,
            )

        return Invoice(
            payment_id=payment.id,
            invoice_id=payment.invoice_id,
            date=payment.date,
            due_date=entry.due_date,
            method=payment.method,
            school=school,
            student_name=entry.student_name,
            student_adm_no=entry.student_adm_no,
            student_class=entry.student_class,
            parent_name=entry.student_parent_name,
            parent_whatsapp=entry.student_whatsapp,
            line_items=[LineItem(description=entry.fee_type_name, amount=payment.amount)],
            total_paid=payment.amount,
            is_paid=entry.balance <= 0,
            is_grouped=False,
        )

    @staticmethod
    async def latest_invoice_for_entry(ledger: FeeLedger, fee_entry_id: str) -> Invoice:
        """Receipt of the most recent payment against a fee entry"""
        relevant = [
            p for p in await ledger.payments()
            if not p.is_grouped and p.fee_entry_id == fee_entry_id
        ]
        if not relevant:
            raise NotFoundError("Invoice for fee entry", fee_entry_id)
        # Stable: the later record wins among same-day payments. Undated sort first
        latest = sorted(relevant, key=lambda p: undated_first(p.date))[-1]
        return await InvoiceService.build_invoice(ledger, latest.id)

    @staticmethod
    async def list_invoices(ledger: FeeLedger, search: Optional[str] = None) -> List[InvoiceListItem]:
        """Payments whose invoice number contains the search text, newest first"""
        needle = (search or "").strip().lower()
        students_by_id = {s.id: s for s in await ledger.students()}
        items = []
        for payment in reversed(await ledger.payments()):
            if needle and needle not in payment.invoice_id.lower():
                continue
            student = students_by_id.get(payment.student_id)
            items.append(InvoiceListItem(
                payment_id=payment.id,
                invoice_id=payment.invoice_id,
                student_name=student.name if student else NOT_AVAILABLE,
                date=payment.date,
                amount=payment.amount,
                is_grouped=payment.is_grouped,
            ))
        return items
