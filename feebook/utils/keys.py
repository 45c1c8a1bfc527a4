"""Fee entry key formatting and parsing.

Payments reference the obligation they settle through a composite string
key. The three shapes are part of the stored data:

    "{studentId}-{feeTypeId}"   academic fee
    "v-{assignmentId}-{month}"  vehicle fee for one academic month
    "manual-{invoiceId}"        grouped receipt (references nothing)
"""

from typing import Union

from pydantic import BaseModel, ConfigDict

from feebook.models.enums import ACADEMIC_MONTHS

VEHICLE_PREFIX = "v-"
GROUPED_PREFIX = "manual-"


class AcademicKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    student_id: int
    fee_type_id: int

    def __str__(self) -> str:
        return f"{self.student_id}-{self.fee_type_id}"


class VehicleKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    assignment_id: int
    month: str

    def __str__(self) -> str:
        return f"{VEHICLE_PREFIX}{self.assignment_id}-{self.month}"


class GroupedKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    invoice_id: str

    def __str__(self) -> str:
        return f"{GROUPED_PREFIX}{self.invoice_id}"


FeeEntryKey = Union[AcademicKey, VehicleKey, GroupedKey]


def parse_fee_entry_key(text: str) -> FeeEntryKey:
    """Parse a stored key; raises ValueError when it matches no shape."""
    if text.startswith(GROUPED_PREFIX):
        return GroupedKey(invoice_id=text[len(GROUPED_PREFIX):])

    if text.startswith(VEHICLE_PREFIX):
        assignment_part, _, month = text[len(VEHICLE_PREFIX):].partition("-")
        if not assignment_part.isdigit() or month not in ACADEMIC_MONTHS:
            raise ValueError(f"Malformed vehicle fee key: {text!r}")
        return VehicleKey(assignment_id=int(assignment_part), month=month)

    student_part, sep, fee_type_part = text.partition("-")
    if not sep or not student_part.isdigit() or not fee_type_part.isdigit():
        raise ValueError(f"Malformed fee entry key: {text!r}")
    return AcademicKey(student_id=int(student_part), fee_type_id=int(fee_type_part))


def is_grouped_key(text: str) -> bool:
    return text.startswith(GROUPED_PREFIX)
