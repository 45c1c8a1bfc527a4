"""Models Package - Export all models for easy imports"""

from feebook.models.base import TimestampMixin
from feebook.models.enums import *
from feebook.models.record import StoredCollection


__all__ = [
    "TimestampMixin",
    "StoredCollection",
    # Enums
    "Collection",
    "PaymentMethod",
    "FeeStatus",
    "TransactionType",
    "ALL_SECTIONS",
    "ACADEMIC_MONTHS",
    "DEFAULT_CLASSES",
    "BANK_METHODS",
]
