"""Student Service"""

from typing import List, Optional

from feebook.core.exceptions import NotFoundError
from feebook.core.logging import get_logger
from feebook.models.enums import Collection
from feebook.schemas.catalog import StudentCreate, StudentUpdate
from feebook.schemas.records import Student
from feebook.services.fee_ledger import FeeLedger
from feebook.services.school_service import SchoolService

logger = get_logger(__name__)


class StudentService:
    @staticmethod
    async def list_students(ledger: FeeLedger, class_name: Optional[str] = None) -> List[Student]:
        students = await ledger.students()
        if class_name and class_name != "All":
            students = [s for s in students if s.class_name == class_name]
        return students

    @staticmethod
    async def get_student(ledger: FeeLedger, student_id: int) -> Student:
        student = await ledger.student(student_id)
        if student is None:
            raise NotFoundError("Student", student_id)
        return student

    @staticmethod
    async def create_student(ledger: FeeLedger, data: StudentCreate) -> Student:
        await SchoolService.ensure_class(ledger, data.class_name)
        students = await ledger.students()
        student = Student(id=await ledger.next_id(Collection.STUDENTS), **data.model_dump())
        students.append(student)
        await ledger.save(Collection.STUDENTS, students)
        return student

    @staticmethod
    async def update_student(ledger: FeeLedger, student_id: int, data: StudentUpdate) -> Student:
        await SchoolService.ensure_class(ledger, data.class_name)
        students = await ledger.students()
        for index, existing in enumerate(students):
            if existing.id == student_id:
                students[index] = Student(id=student_id, **data.model_dump())
                await ledger.save(Collection.STUDENTS, students)
                return students[index]
        raise NotFoundError("Student", student_id)

    @staticmethod
    async def delete_student(ledger: FeeLedger, student_id: int) -> None:
        """Delete a student along with their payments and vehicle assignment"""
        students = await ledger.students()
        remaining = [s for s in students if s.id != student_id]
        if len(remaining) == len(students):
            raise NotFoundError("Student", student_id)

        payments = [p for p in await ledger.payments() if p.student_id != student_id]
        assignments = [a for a in await ledger.vehicle_assignments() if a.student_id != student_id]

        await ledger.save(Collection.STUDENTS, remaining)
        await ledger.save(Collection.PAYMENTS, payments)
        await ledger.save(Collection.VEHICLE_ASSIGNMENTS, assignments)
        logger.info("Student deleted with payments and vehicle assignment", extra={"student_id": student_id})
