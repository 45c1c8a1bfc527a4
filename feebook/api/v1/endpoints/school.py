"""School details endpoints (invoice header)"""

from typing import Any
from fastapi import APIRouter, Depends

from feebook.api import deps
from feebook.schemas.records import SchoolInfo
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_ledger import FeeLedger
from feebook.services.school_service import SchoolService

router = APIRouter()


@router.get("", response_model=SuccessResponse[SchoolInfo])
async def get_school_info(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await SchoolService.get_school_info(ledger))


@router.put("", response_model=SuccessResponse[SchoolInfo])
async def update_school_info(body: SchoolInfo, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    info = await SchoolService.update_school_info(ledger, body)
    return SuccessResponse(data=info, message="School information saved")
