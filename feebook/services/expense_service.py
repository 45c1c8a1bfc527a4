"""Expense Service"""

from typing import List

from feebook.core.exceptions import NotFoundError
from feebook.models.enums import Collection
from feebook.schemas.catalog import ExpenseCreate, ExpenseUpdate
from feebook.schemas.records import Expense
from feebook.services.fee_ledger import FeeLedger


class ExpenseService:
    @staticmethod
    async def list_expenses(ledger: FeeLedger) -> List[Expense]:
        return await ledger.expenses()

    @staticmethod
    async def create_expense(ledger: FeeLedger, data: ExpenseCreate) -> Expense:
        expenses = await ledger.expenses()
        expense = Expense(id=await ledger.next_id(Collection.EXPENSES), **data.model_dump())
        expenses.append(expense)
        await ledger.save(Collection.EXPENSES, expenses)
        return expense

    @staticmethod
    async def update_expense(ledger: FeeLedger, expense_id: int, data: ExpenseUpdate) -> Expense:
        expenses = await ledger.expenses()
        for index, existing in enumerate(expenses):
            if existing.id == expense_id:
                expenses[index] = Expense(id=expense_id, **data.model_dump())
                await ledger.save(Collection.EXPENSES, expenses)
                return expenses[index]
        raise NotFoundError("Expense", expense_id)

    @staticmethod
    async def delete_expense(ledger: FeeLedger, expense_id: int) -> None:
        expenses = await ledger.expenses()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            raise NotFoundError("Expense", expense_id)
        await ledger.save(Collection.EXPENSES, remaining)
