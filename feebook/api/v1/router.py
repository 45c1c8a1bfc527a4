"""API V1 Router"""

from fastapi import APIRouter

from feebook.api.v1.endpoints import (
    classes, students, fee_types, fee_entries, payments,
    invoices, vehicle, expenses, reports, school,
)

api_router = APIRouter()

api_router.include_router(classes.router, prefix="/classes", tags=["Classes"])
api_router.include_router(students.router, prefix="/students", tags=["Students"])
api_router.include_router(fee_types.router, prefix="/fee-types", tags=["Fee Types"])
api_router.include_router(fee_entries.router, prefix="/fee-entries", tags=["Fee Entries"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["Invoices"])
api_router.include_router(vehicle.router, prefix="/vehicle", tags=["Vehicle"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["Expenses"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])
api_router.include_router(school.router, prefix="/school", tags=["School"])
