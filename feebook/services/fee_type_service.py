"""Fee Type Service"""

from typing import List

from feebook.core.exceptions import NotFoundError
from feebook.models.enums import ALL_SECTIONS, Collection
from feebook.schemas.catalog import FeeTypeCreate, FeeTypeUpdate
from feebook.schemas.records import FeeType
from feebook.services.fee_ledger import FeeLedger
from feebook.services.school_service import SchoolService


class FeeTypeService:
    @staticmethod
    async def list_fee_types(ledger: FeeLedger) -> List[FeeType]:
        return await ledger.fee_types()

    @staticmethod
    async def get_fee_type(ledger: FeeLedger, fee_type_id: int) -> FeeType:
        for fee_type in await ledger.fee_types():
            if fee_type.id == fee_type_id:
                return fee_type
        raise NotFoundError("Fee type", fee_type_id)

    @staticmethod
    async def _check_section(ledger: FeeLedger, section: str) -> None:
        if section != ALL_SECTIONS:
            await SchoolService.ensure_class(ledger, section)

    @staticmethod
    async def create_fee_type(ledger: FeeLedger, data: FeeTypeCreate) -> FeeType:
        await FeeTypeService._check_section(ledger, data.section)
        fee_types = await ledger.fee_types()
        fee_type = FeeType(id=await ledger.next_id(Collection.FEE_TYPES), **data.model_dump())
        fee_types.append(fee_type)
        await ledger.save(Collection.FEE_TYPES, fee_types)
        return fee_type

    @staticmethod
    async def update_fee_type(ledger: FeeLedger, fee_type_id: int, data: FeeTypeUpdate) -> FeeType:
        await FeeTypeService._check_section(ledger, data.section)
        fee_types = await ledger.fee_types()
        for index, existing in enumerate(fee_types):
            if existing.id == fee_type_id:
                fee_types[index] = FeeType(id=fee_type_id, **data.model_dump())
                await ledger.save(Collection.FEE_TYPES, fee_types)
                return fee_types[index]
        raise NotFoundError("Fee type", fee_type_id)

    @staticmethod
    async def delete_fee_type(ledger: FeeLedger, fee_type_id: int) -> None:
        """Historical payments for the fee type are kept"""
        fee_types = await ledger.fee_types()
        remaining = [ft for ft in fee_types if ft.id != fee_type_id]
        if len(remaining) == len(fee_types):
            raise NotFoundError("Fee type", fee_type_id)
        await ledger.save(Collection.FEE_TYPES, remaining)
