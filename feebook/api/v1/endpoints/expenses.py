"""Expense endpoints"""

from typing import Any, List
from fastapi import APIRouter, Depends

from feebook.api import deps
from feebook.schemas.catalog import ExpenseCreate, ExpenseUpdate
from feebook.schemas.records import Expense
from feebook.schemas.responses import SuccessResponse
from feebook.services.expense_service import ExpenseService
from feebook.services.fee_ledger import FeeLedger

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[Expense]])
async def list_expenses(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await ExpenseService.list_expenses(ledger))


@router.post("", response_model=SuccessResponse[Expense])
async def create_expense(body: ExpenseCreate, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    expense = await ExpenseService.create_expense(ledger, body)
    return SuccessResponse(data=expense, message="Expense recorded")


@router.put("/{expense_id}", response_model=SuccessResponse[Expense])
async def update_expense(
    expense_id: int,
    body: ExpenseUpdate,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    expense = await ExpenseService.update_expense(ledger, expense_id, body)
    return SuccessResponse(data=expense, message="Expense updated")


@router.delete("/{expense_id}", response_model=SuccessResponse)
async def delete_expense(expense_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    await ExpenseService.delete_expense(ledger, expense_id)
    return SuccessResponse(message="Expense deleted")
