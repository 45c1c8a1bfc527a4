import datetime as dt
from typing import List, Optional

from pydantic import Field

from feebook.models.enums import ALL_SECTIONS, PaymentMethod
from feebook.schemas.base import CamelModel


class ClassCreate(CamelModel):
    name: str


class StudentCreate(CamelModel):
    name: str = Field(min_length=1)
    adm_no: str = ""
    class_name: str = Field(alias="class")
    parent_name: str = ""
    whatsapp: str = ""
    contact: str = ""


class StudentUpdate(StudentCreate):
    pass


class FeeTypeCreate(CamelModel):
    name: str = Field(min_length=1)
    section: str = ALL_SECTIONS
    amount: float = Field(ge=0)
    due_date: Optional[dt.date] = None
    remind_date: Optional[dt.date] = None


class FeeTypeUpdate(FeeTypeCreate):
    pass


class RouteCreate(CamelModel):
    name: str = Field(min_length=1)
    driver: str = ""


class VehicleAssignmentCreate(CamelModel):
    student_id: int
    route_id: int
    monthly_fee: float = Field(ge=0)


class VehicleMonthsUpdate(CamelModel):
    """Change route and fee for the selected months only"""
    route_id: int
    fee: float = Field(ge=0)
    months: List[str] = Field(default_factory=list)


class DriverPayoutUpdate(CamelModel):
    route_id: int
    month: str
    paid_to_driver: float = Field(ge=0)


class ExpenseCreate(CamelModel):
    date: dt.date
    category: str = Field(min_length=1)
    description: str = ""
    amount: float = Field(gt=0)
    pay_mode: PaymentMethod


class ExpenseUpdate(ExpenseCreate):
    pass
