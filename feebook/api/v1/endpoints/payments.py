"""Payment endpoints"""

from typing import Any, List
from fastapi import APIRouter, Depends

from feebook.api import deps
from feebook.schemas.payment import GroupedPaymentCreate, SinglePaymentCreate
from feebook.schemas.records import GroupedPayment, Payment, SinglePayment
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_ledger import FeeLedger
from feebook.services.payment_service import PaymentService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[Payment]])
async def list_payments(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await PaymentService.list_payments(ledger))


@router.post("", response_model=SuccessResponse[SinglePayment])
async def record_payment(body: SinglePaymentCreate, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Record a payment against one fee entry. Do not resubmit on success."""
    payment = await PaymentService.record_single_payment(
        ledger,
        fee_entry_id=body.fee_entry_id,
        amount=body.amount,
        date=body.date,
        method=body.method,
        invoice_id=body.invoice_id,
    )
    return SuccessResponse(data=payment, message="Payment recorded")


@router.post("/grouped", response_model=SuccessResponse[GroupedPayment])
async def record_grouped_payment(
    body: GroupedPaymentCreate,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    """Pay the full balance of several fee entries under one invoice number."""
    master = await PaymentService.record_grouped_payment(
        ledger,
        student_id=body.student_id,
        fee_entry_ids=body.fee_entry_ids,
        date=body.date,
        method=body.method,
        invoice_id=body.invoice_id,
    )
    return SuccessResponse(data=master, message="Grouped payment recorded")


@router.get("/{payment_id}", response_model=SuccessResponse[Payment])
async def get_payment(payment_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await PaymentService.get_payment(ledger, payment_id))
