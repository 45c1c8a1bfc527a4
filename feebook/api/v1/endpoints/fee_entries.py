"""Derived fee entry endpoints"""

from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query

from feebook.api import deps
from feebook.core.exceptions import NotFoundError
from feebook.schemas.ledger import FeeEntry, Invoice
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_entry_service import filter_fee_entries
from feebook.services.fee_ledger import FeeLedger
from feebook.services.invoice_service import InvoiceService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[FeeEntry]])
async def list_fee_entries(
    class_name: Optional[str] = Query(None, alias="class"),
    status: Optional[str] = None,
    search: Optional[str] = None,
    student_id: Optional[int] = None,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    """
    Academic and vehicle fee entries with paid, balance and status.

    Filters: class, status (Pending/Partial/Paid), student name search.
    """
    entries = filter_fee_entries(
        await ledger.fee_entries(), class_name, status, search, student_id
    )
    return SuccessResponse(data=entries)


@router.get("/{fee_entry_id}", response_model=SuccessResponse[FeeEntry])
async def get_fee_entry(fee_entry_id: str, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    entry = await ledger.find_fee_entry(fee_entry_id)
    if entry is None:
        raise NotFoundError("Fee entry", fee_entry_id)
    return SuccessResponse(data=entry)


@router.get("/{fee_entry_id}/invoice", response_model=SuccessResponse[Invoice])
async def latest_invoice(fee_entry_id: str, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Receipt for the most recent payment against this entry."""
    return SuccessResponse(data=await InvoiceService.latest_invoice_for_entry(ledger, fee_entry_id))
