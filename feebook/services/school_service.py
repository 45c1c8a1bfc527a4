"""School Service - class list and school header details"""

from typing import List

from feebook.core.exceptions import NotFoundError, ValidationError
from feebook.models.enums import DEFAULT_CLASSES, Collection
from feebook.schemas.records import SchoolInfo
from feebook.services.fee_ledger import FeeLedger


class SchoolService:
    @staticmethod
    async def list_classes(ledger: FeeLedger) -> List[str]:
        """Class names, sorted; seeds the defaults on first use"""
        classes = await ledger.classes()
        if not classes:
            classes = list(DEFAULT_CLASSES)
            await ledger.save(Collection.CLASSES, classes)
        return sorted(classes)

    @staticmethod
    async def add_class(ledger: FeeLedger, name: str) -> List[str]:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Class name is required.")
        classes = await SchoolService.list_classes(ledger)
        if name not in classes:
            classes.append(name)
            await ledger.save(Collection.CLASSES, classes)
        return sorted(classes)

    @staticmethod
    async def delete_class(ledger: FeeLedger, name: str) -> List[str]:
        classes = await SchoolService.list_classes(ledger)
        if name not in classes:
            raise NotFoundError("Class", name)
        classes = [c for c in classes if c != name]
        await ledger.save(Collection.CLASSES, classes)
        return classes

    @staticmethod
    async def ensure_class(ledger: FeeLedger, name: str) -> None:
        if name not in await SchoolService.list_classes(ledger):
            raise ValidationError(f"Class '{name}' is not defined.")

    @staticmethod
    async def get_school_info(ledger: FeeLedger) -> SchoolInfo:
        return await ledger.school_info()

    @staticmethod
    async def update_school_info(ledger: FeeLedger, info: SchoolInfo) -> SchoolInfo:
        await ledger.save(Collection.SCHOOL_INFO, [info])
        return info
