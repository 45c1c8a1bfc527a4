"""Report endpoints"""

from datetime import date
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query

from feebook.api import deps
from feebook.schemas.ledger import DashboardSummary, FeeSheet, TransactionReport
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_ledger import FeeLedger
from feebook.services.report_service import ReportService
from feebook.services.summary_service import SummaryService

router = APIRouter()


@router.get("/transactions", response_model=SuccessResponse[TransactionReport])
async def transactions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    type: Optional[str] = None,
    method: Optional[str] = None,
    search: Optional[str] = None,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    """Income and expense ledger sorted by date, with totals."""
    report = await ReportService.transactions(ledger, start_date, end_date, type, method, search)
    return SuccessResponse(data=report)


@router.get("/dashboard", response_model=SuccessResponse[DashboardSummary])
async def dashboard(today: Optional[date] = None, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await ReportService.dashboard(ledger, today))


@router.get("/fee-sheet", response_model=SuccessResponse[FeeSheet])
async def fee_sheet(
    class_name: Optional[str] = Query(None, alias="class"),
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    """Student x fee type grid of academic dues with totals."""
    return SuccessResponse(data=await SummaryService.fee_sheet(ledger, class_name))
