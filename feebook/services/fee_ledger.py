"""FeeLedger - record store handle plus the memoized fee entry derivation"""

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel

from feebook.core.logging import get_logger
from feebook.models.enums import Collection
from feebook.schemas.ledger import FeeEntry
from feebook.schemas.records import (
    Expense,
    FeeType,
    Route,
    SchoolInfo,
    Student,
    VehicleAssignment,
    VehicleLedgerEntry,
    assignments_adapter,
    expenses_adapter,
    fee_types_adapter,
    ledger_entries_adapter,
    payments_adapter,
    routes_adapter,
    students_adapter,
)
from feebook.services.fee_entry_service import derive_fee_entries
from feebook.services.record_store import CollectionName, RecordStore
from feebook.utils.calendar import AcademicCalendar

logger = get_logger(__name__)


class FeeLedger:
    """
    Session object for one unit of work against a record store.

    Every write goes through ``save``, which persists and drops the cached
    fee entries together, so a read after a write always recomputes.
    """

    def __init__(self, store: RecordStore, calendar: Optional[AcademicCalendar] = None):
        self.store = store
        self.calendar = calendar or AcademicCalendar.from_settings()
        self._entries: Optional[List[FeeEntry]] = None

    # --- raw access -------------------------------------------------------

    async def load(self, collection: CollectionName) -> List[Any]:
        return await self.store.load(collection)

    async def next_id(self, collection: CollectionName) -> int:
        return await self.store.next_id(collection)

    async def save(self, collection: CollectionName, records: Iterable[Any]) -> None:
        serialized = [r.to_record() if isinstance(r, BaseModel) else r for r in records]
        await self.store.save(collection, serialized)
        self.invalidate()

    def invalidate(self) -> None:
        self._entries = None

    # --- typed loaders ----------------------------------------------------

    async def students(self) -> List[Student]:
        return students_adapter.validate_python(await self.load(Collection.STUDENTS))

    async def fee_types(self) -> List[FeeType]:
        return fee_types_adapter.validate_python(await self.load(Collection.FEE_TYPES))

    async def payments(self) -> list:
        """Single and grouped payments in insertion order"""
        return payments_adapter.validate_python(await self.load(Collection.PAYMENTS))

    async def expenses(self) -> List[Expense]:
        return expenses_adapter.validate_python(await self.load(Collection.EXPENSES))

    async def routes(self) -> List[Route]:
        return routes_adapter.validate_python(await self.load(Collection.ROUTES))

    async def vehicle_assignments(self) -> List[VehicleAssignment]:
        return assignments_adapter.validate_python(await self.load(Collection.VEHICLE_ASSIGNMENTS))

    async def vehicle_ledger(self) -> List[VehicleLedgerEntry]:
        return ledger_entries_adapter.validate_python(await self.load(Collection.VEHICLE_LEDGER))

    async def classes(self) -> List[str]:
        return [str(c) for c in await self.load(Collection.CLASSES)]

    async def school_info(self) -> SchoolInfo:
        records = await self.load(Collection.SCHOOL_INFO)
        return SchoolInfo.model_validate(records[0]) if records else SchoolInfo()

    async def student(self, student_id: int) -> Optional[Student]:
        record = await self.store.find_by_id(Collection.STUDENTS, student_id)
        return Student.model_validate(record) if record else None

    # --- derived ----------------------------------------------------------

    async def fee_entries(self, force_refresh: bool = False) -> List[FeeEntry]:
        """All fee entries; served from cache until the next write"""
        if self._entries is not None and not force_refresh:
            return self._entries

        self._entries = derive_fee_entries(
            students=await self.students(),
            fee_types=await self.fee_types(),
            payments=await self.payments(),
            assignments=await self.vehicle_assignments(),
            calendar=self.calendar,
        )
        logger.debug("Derived fee entries", extra={"count": len(self._entries)})
        return self._entries

    async def find_fee_entry(self, fee_entry_id: str) -> Optional[FeeEntry]:
        for entry in await self.fee_entries():
            if entry.id == fee_entry_id:
                return entry
        return None
