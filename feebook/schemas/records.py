"""Persisted record shapes.

Field aliases are the stored key names and must not change: existing
record stores are read back with them.
"""

import datetime as dt
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    AliasChoices,
    BeforeValidator,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
    model_validator,
)

from feebook.models.enums import ACADEMIC_MONTHS, ALL_SECTIONS, PaymentMethod
from feebook.schemas.base import CamelModel


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Older records store a missing date as ""
BlankableDate = Annotated[Optional[dt.date], BeforeValidator(_blank_to_none)]


class Student(CamelModel):
    id: int
    name: str
    adm_no: str = ""
    class_name: str = Field(alias="class")
    parent_name: str = ""
    whatsapp: str = ""
    contact: str = ""


class FeeType(CamelModel):
    id: int
    name: str
    section: str = ALL_SECTIONS
    amount: float
    due_date: Optional[dt.date] = None
    remind_date: Optional[dt.date] = None

    @field_validator("due_date", "remind_date", mode="before")
    @classmethod
    def blank_dates_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def applies_to(self, class_name: str) -> bool:
        return self.section == ALL_SECTIONS or self.section == class_name


class Route(CamelModel):
    id: int
    name: str
    driver: str = ""


class MonthlyFee(CamelModel):
    route_id: Optional[int] = None
    fee: float = 0
    paid: float = 0


class VehicleAssignment(CamelModel):
    """One per student; route and fee may differ month to month"""

    id: int
    student_id: int
    monthly_fees: Dict[str, MonthlyFee] = Field(default_factory=dict)

    @model_validator(mode="after")
    def fill_missing_months(self) -> "VehicleAssignment":
        for month in ACADEMIC_MONTHS:
            self.monthly_fees.setdefault(month, MonthlyFee())
        return self

    def is_on_route(self, route_id: int) -> bool:
        return any(m.route_id == route_id for m in self.monthly_fees.values())


class VehicleLedgerEntry(CamelModel):
    route_id: int
    month: str
    paid_to_driver: float = 0


class LineItem(CamelModel):
    # Older grouped receipts were stored as {desc, amt}
    description: str = Field(validation_alias=AliasChoices("description", "desc"))
    amount: float = Field(validation_alias=AliasChoices("amount", "amt"))


class SinglePayment(CamelModel):
    id: int
    fee_entry_id: str
    student_id: Optional[int] = None
    fee_type_id: Optional[int] = None
    amount: float
    date: BlankableDate = None
    method: PaymentMethod
    invoice_id: str

    @property
    def is_grouped(self) -> bool:
        return False


class GroupedPayment(CamelModel):
    """Receipt-only master record; its money is carried by the sub-payments"""

    id: int
    fee_entry_id: str
    student_id: Optional[int] = None
    amount: float
    date: BlankableDate = None
    method: PaymentMethod
    invoice_id: str
    line_items: List[LineItem]

    @property
    def is_grouped(self) -> bool:
        return True


def _payment_kind(value: Any) -> str:
    if isinstance(value, dict):
        has_items = value.get("lineItems", value.get("line_items")) is not None
        return "grouped" if has_items else "single"
    return "grouped" if isinstance(value, GroupedPayment) else "single"


Payment = Annotated[
    Union[
        Annotated[SinglePayment, Tag("single")],
        Annotated[GroupedPayment, Tag("grouped")],
    ],
    Discriminator(_payment_kind),
]


class Expense(CamelModel):
    id: int
    date: BlankableDate = None
    category: str
    description: str = ""
    amount: float
    pay_mode: PaymentMethod


class SchoolInfo(CamelModel):
    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    whatsapp: str = ""
    website: str = ""


students_adapter = TypeAdapter(List[Student])
fee_types_adapter = TypeAdapter(List[FeeType])
routes_adapter = TypeAdapter(List[Route])
assignments_adapter = TypeAdapter(List[VehicleAssignment])
ledger_entries_adapter = TypeAdapter(List[VehicleLedgerEntry])
payments_adapter = TypeAdapter(List[Payment])
expenses_adapter = TypeAdapter(List[Expense])
