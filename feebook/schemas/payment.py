import datetime as dt
from typing import List

from pydantic import Field

from feebook.models.enums import PaymentMethod
from feebook.schemas.base import CamelModel


class SinglePaymentCreate(CamelModel):
    fee_entry_id: str
    amount: float = Field(gt=0)
    date: dt.date
    method: PaymentMethod = PaymentMethod.CASH
    # Checked by the service so a blank invoice is a domain ValidationError
    invoice_id: str = ""


class GroupedPaymentCreate(CamelModel):
    """Pays the full remaining balance of every selected entry"""
    student_id: int
    fee_entry_ids: List[str] = Field(default_factory=list)
    date: dt.date
    method: PaymentMethod = PaymentMethod.CASH
    invoice_id: str = ""
