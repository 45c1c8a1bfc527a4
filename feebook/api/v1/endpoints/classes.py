"""Class list endpoints"""

from typing import Any, List
from fastapi import APIRouter, Depends

from feebook.api import deps
from feebook.schemas.catalog import ClassCreate
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_ledger import FeeLedger
from feebook.services.school_service import SchoolService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[str]])
async def list_classes(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """List class names. Defaults are seeded on first use."""
    return SuccessResponse(data=await SchoolService.list_classes(ledger))


@router.post("", response_model=SuccessResponse[List[str]])
async def add_class(body: ClassCreate, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    classes = await SchoolService.add_class(ledger, body.name)
    return SuccessResponse(data=classes, message="Class saved")


@router.delete("/{name}", response_model=SuccessResponse[List[str]])
async def delete_class(name: str, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    classes = await SchoolService.delete_class(ledger, name)
    return SuccessResponse(data=classes, message="Class deleted")
