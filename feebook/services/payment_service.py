"""Payment Service - records payments against derived fee entries"""

import datetime as dt
from typing import Iterable, List, Optional

from feebook.core.exceptions import NotFoundError, ValidationError
from feebook.core.logging import get_logger
from feebook.models.enums import Collection, FeeStatus, PaymentMethod
from feebook.schemas.ledger import FeeEntry
from feebook.schemas.records import GroupedPayment, LineItem, SinglePayment, VehicleAssignment
from feebook.services.fee_ledger import FeeLedger
from feebook.utils.keys import GroupedKey, VehicleKey, parse_fee_entry_key

logger = get_logger(__name__)


def _require_invoice(invoice_id: Optional[str]) -> str:
    invoice_id = (invoice_id or "").strip()
    if not invoice_id:
        raise ValidationError("Invoice Number is required.")
    return invoice_id


def sync_vehicle_paid(
    assignments: List[VehicleAssignment],
    payments: list,
    fee_entry_ids: Iterable[str],
) -> bool:
    """
    Set each vehicle month's ``paid`` to the sum of its payments.

    Running it again over the same payments leaves the months unchanged.
    """
    by_id = {a.id: a for a in assignments}
    changed = False
    for fee_entry_id in fee_entry_ids:
        key = parse_fee_entry_key(fee_entry_id)
        if not isinstance(key, VehicleKey):
            continue
        assignment = by_id.get(key.assignment_id)
        if assignment is None:
            continue
        assignment.monthly_fees[key.month].paid = sum(
            p.amount for p in payments
            if not p.is_grouped and p.fee_entry_id == fee_entry_id
        )
        changed = True
    return changed


class PaymentService:
    @staticmethod
    async def list_payments(ledger: FeeLedger) -> list:
        return await ledger.payments()

    @staticmethod
    async def get_payment(ledger: FeeLedger, payment_id: int):
        for payment in await ledger.payments():
            if payment.id == payment_id:
                return payment
        raise NotFoundError("Payment", payment_id)

    @staticmethod
    async def record_single_payment(
        ledger: FeeLedger,
        fee_entry_id: str,
        amount: float,
        date: dt.date,
        method: PaymentMethod,
        invoice_id: str,
    ) -> SinglePayment:
        invoice_id = _require_invoice(invoice_id)
        if amount <= 0:
            raise ValidationError("Payment amount must be greater than zero.")

        entry = await ledger.find_fee_entry(fee_entry_id)
        if entry is None:
            raise NotFoundError("Fee entry", fee_entry_id)

        payments = await ledger.payments()
        payment = SinglePayment(
            id=await ledger.next_id(Collection.PAYMENTS),
            fee_entry_id=entry.id,
            student_id=entry.student_id,
            fee_type_id=entry.fee_type_id,
            amount=amount,
            date=date,
            method=method,
            invoice_id=invoice_id,
        )
        payments.append(payment)
        await ledger.save(Collection.PAYMENTS, payments)

        if entry.is_vehicle_fee:
            assignments = await ledger.vehicle_assignments()
            if sync_vehicle_paid(assignments, payments, [entry.id]):
                await ledger.save(Collection.VEHICLE_ASSIGNMENTS, assignments)

        logger.info(
            "Payment recorded",
            extra={
                "payment_id": payment.id,
                "fee_entry_id": entry.id,
                "amount": amount,
                "invoice_id": invoice_id,
            },
        )
        return payment

    @staticmethod
    async def record_grouped_payment(
        ledger: FeeLedger,
        student_id: int,
        fee_entry_ids: List[str],
        date: dt.date,
        method: PaymentMethod,
        invoice_id: str,
    ) -> GroupedPayment:
        """
        Settle several entries of one student under a single receipt.

        Each selected entry is paid in full with its own payment record; a
        master record carrying the line items and the summed amount is
        appended last and only serves to print the receipt.
        """
        invoice_id = _require_invoice(invoice_id)
        selected = list(dict.fromkeys(fee_entry_ids or []))
        if not selected:
            raise ValidationError("Please select at least one fee to pay.")
        if await ledger.student(student_id) is None:
            raise NotFoundError("Student", student_id)

        entries: List[FeeEntry] = []
        for fee_entry_id in selected:
            entry = await ledger.find_fee_entry(fee_entry_id)
            if entry is None:
                raise NotFoundError("Fee entry", fee_entry_id)
            if entry.student_id != student_id:
                raise ValidationError(f"Fee entry {fee_entry_id} does not belong to student {student_id}.")
            if entry.status == FeeStatus.PAID or entry.balance <= 0:
                raise ValidationError(f"Fee entry {fee_entry_id} has no outstanding balance.")
            entries.append(entry)

        payments = await ledger.payments()
        next_id = await ledger.next_id(Collection.PAYMENTS)
        line_items: List[LineItem] = []
        total = 0.0

        for entry in entries:
            payments.append(SinglePayment(
                id=next_id,
                fee_entry_id=entry.id,
                student_id=student_id,
                fee_type_id=entry.fee_type_id,
                amount=entry.balance,
                date=date,
                method=method,
                invoice_id=invoice_id,
            ))
            line_items.append(LineItem(description=entry.fee_type_name, amount=entry.balance))
            total += entry.balance
            next_id += 1

        master = GroupedPayment(
            id=next_id,
            fee_entry_id=str(GroupedKey(invoice_id=invoice_id)),
            student_id=student_id,
            amount=total,
            date=date,
            method=method,
            invoice_id=invoice_id,
            line_items=line_items,
        )
        payments.append(master)
        await ledger.save(Collection.PAYMENTS, payments)

        vehicle_ids = [e.id for e in entries if e.is_vehicle_fee]
        if vehicle_ids:
            assignments = await ledger.vehicle_assignments()
            if sync_vehicle_paid(assignments, payments, vehicle_ids):
                await ledger.save(Collection.VEHICLE_ASSIGNMENTS, assignments)

        logger.info(
            "Grouped payment recorded",
            extra={
                "payment_id": master.id,
                "student_id": student_id,
                "entries": len(entries),
                "amount": total,
                "invoice_id": invoice_id,
            },
        )
        return master
