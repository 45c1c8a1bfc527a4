"""Centralized Enum Definitions"""

import enum


class Collection(str, enum.Enum):
    """Record store collection names (persisted keys)"""
    STUDENTS = "students"
    FEE_TYPES = "feeTypes"
    PAYMENTS = "payments"
    EXPENSES = "expenses"
    ROUTES = "routes"
    VEHICLE_ASSIGNMENTS = "vehicleAssignments"
    VEHICLE_LEDGER = "vehicleLedger"
    CLASSES = "classes"
    SCHOOL_INFO = "schoolInfo"


class PaymentMethod(str, enum.Enum):
    """How money changed hands"""
    CASH = "Cash"
    ONLINE = "Online"
    CARD = "Card"


class FeeStatus(str, enum.Enum):
    """Derived status of a fee entry"""
    PENDING = "Pending"
    PARTIAL = "Partial"
    PAID = "Paid"


class TransactionType(str, enum.Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


# Fee types scoped to every class
ALL_SECTIONS = "All"

# Vehicle billing cycle, in academic order; keys of VehicleAssignment.monthlyFees
ACADEMIC_MONTHS = ("Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar")

DEFAULT_CLASSES = ("LKG", "UKG", "Class 1", "Class 2", "Class 3", "Class 4", "Class 5")

BANK_METHODS = (PaymentMethod.ONLINE, PaymentMethod.CARD)
