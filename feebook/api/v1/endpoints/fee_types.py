"""Fee type endpoints"""

from typing import Any, List
from fastapi import APIRouter, Depends

from feebook.api import deps
from feebook.schemas.catalog import FeeTypeCreate, FeeTypeUpdate
from feebook.schemas.records import FeeType
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_ledger import FeeLedger
from feebook.services.fee_type_service import FeeTypeService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[FeeType]])
async def list_fee_types(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await FeeTypeService.list_fee_types(ledger))


@router.post("", response_model=SuccessResponse[FeeType])
async def create_fee_type(body: FeeTypeCreate, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Create a fee type for every class ("All") or for one class."""
    fee_type = await FeeTypeService.create_fee_type(ledger, body)
    return SuccessResponse(data=fee_type, message="Fee type created successfully")


@router.get("/{fee_type_id}", response_model=SuccessResponse[FeeType])
async def get_fee_type(fee_type_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await FeeTypeService.get_fee_type(ledger, fee_type_id))


@router.put("/{fee_type_id}", response_model=SuccessResponse[FeeType])
async def update_fee_type(
    fee_type_id: int,
    body: FeeTypeUpdate,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    fee_type = await FeeTypeService.update_fee_type(ledger, fee_type_id, body)
    return SuccessResponse(data=fee_type, message="Fee type updated successfully")


@router.delete("/{fee_type_id}", response_model=SuccessResponse)
async def delete_fee_type(fee_type_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    await FeeTypeService.delete_fee_type(ledger, fee_type_id)
    return SuccessResponse(message="Fee type deleted")
