"""Invoice endpoints"""

from typing import Any, List, Optional
from fastapi import APIRouter, Depends

from feebook.api import deps
from feebook.schemas.ledger import Invoice, InvoiceListItem
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_ledger import FeeLedger
from feebook.services.invoice_service import InvoiceService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[InvoiceListItem]])
async def list_invoices(search: Optional[str] = None, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Invoices newest first, filtered by invoice number."""
    return SuccessResponse(data=await InvoiceService.list_invoices(ledger, search))


@router.get("/{payment_id}", response_model=SuccessResponse[Invoice])
async def get_invoice(payment_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await InvoiceService.build_invoice(ledger, payment_id))
