"""Student endpoints"""

from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query

from feebook.api import deps
from feebook.schemas.catalog import StudentCreate, StudentUpdate
from feebook.schemas.ledger import FeeEntry, StudentFeeSummary
from feebook.schemas.records import Student
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_entry_service import pending_entries_for_student
from feebook.services.fee_ledger import FeeLedger
from feebook.services.student_service import StudentService
from feebook.services.summary_service import SummaryService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[Student]])
async def list_students(
    class_name: Optional[str] = Query(None, alias="class"),
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    """List students, optionally for one class."""
    return SuccessResponse(data=await StudentService.list_students(ledger, class_name))


@router.post("", response_model=SuccessResponse[Student])
async def create_student(
    student_in: StudentCreate,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    student = await StudentService.create_student(ledger, student_in)
    return SuccessResponse(data=student, message="Student created successfully")


@router.get("/{student_id}", response_model=SuccessResponse[Student])
async def get_student(student_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await StudentService.get_student(ledger, student_id))


@router.put("/{student_id}", response_model=SuccessResponse[Student])
async def update_student(
    student_id: int,
    student_in: StudentUpdate,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    student = await StudentService.update_student(ledger, student_id, student_in)
    return SuccessResponse(data=student, message="Student updated successfully")


@router.delete("/{student_id}", response_model=SuccessResponse)
async def delete_student(student_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Delete a student. Their payments and vehicle assignment go with them."""
    await StudentService.delete_student(ledger, student_id)
    return SuccessResponse(message="Student deleted")


@router.get("/{student_id}/summary", response_model=SuccessResponse[StudentFeeSummary])
async def student_summary(student_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Academic fee totals for one student."""
    return SuccessResponse(data=await SummaryService.summarize(ledger, student_id))


@router.get("/{student_id}/pending-fees", response_model=SuccessResponse[List[FeeEntry]])
async def pending_fees(student_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Fee entries that can still be selected for a grouped payment."""
    await StudentService.get_student(ledger, student_id)
    entries = pending_entries_for_student(await ledger.fee_entries(), student_id)
    return SuccessResponse(data=entries)
