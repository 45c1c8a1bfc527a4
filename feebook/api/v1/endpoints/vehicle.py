"""Vehicle endpoints - routes, assignments and route ledgers"""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from feebook.api import deps
from feebook.schemas.catalog import (
    DriverPayoutUpdate,
    RouteCreate,
    VehicleAssignmentCreate,
    VehicleMonthsUpdate,
)
from feebook.schemas.ledger import RouteLedger
from feebook.schemas.records import Route, Student, VehicleAssignment, VehicleLedgerEntry
from feebook.schemas.responses import SuccessResponse
from feebook.services.fee_ledger import FeeLedger
from feebook.services.vehicle_service import VehicleService

router = APIRouter()


@router.get("/routes", response_model=SuccessResponse[List[Route]])
async def list_routes(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await VehicleService.list_routes(ledger))


@router.post("/routes", response_model=SuccessResponse[Route])
async def create_route(body: RouteCreate, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    route = await VehicleService.create_route(ledger, body)
    return SuccessResponse(data=route, message="Route created successfully")


@router.delete("/routes/{route_id}", response_model=SuccessResponse[Dict[str, int]])
async def delete_route(route_id: int, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    """Delete a route. Students are unassigned for the months that used it."""
    cleared = await VehicleService.delete_route(ledger, route_id)
    return SuccessResponse(data={"months_cleared": cleared}, message="Route deleted")


@router.get("/assignments", response_model=SuccessResponse[List[VehicleAssignment]])
async def list_assignments(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await VehicleService.list_assignments(ledger))


@router.post("/assignments", response_model=SuccessResponse[VehicleAssignment])
async def assign_student(body: VehicleAssignmentCreate, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    assignment = await VehicleService.assign_student(
        ledger, body.student_id, body.route_id, body.monthly_fee
    )
    return SuccessResponse(data=assignment, message="Student added to vehicle")


@router.put("/assignments/{assignment_id}", response_model=SuccessResponse[VehicleAssignment])
async def update_assignment_months(
    assignment_id: int,
    body: VehicleMonthsUpdate,
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    assignment = await VehicleService.update_months(
        ledger, assignment_id, body.route_id, body.fee, body.months
    )
    return SuccessResponse(data=assignment, message="Vehicle assignment updated")


@router.get("/unassigned-students", response_model=SuccessResponse[List[Student]])
async def unassigned_students(ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    return SuccessResponse(data=await VehicleService.unassigned_students(ledger))


@router.get("/ledger", response_model=SuccessResponse[List[RouteLedger]])
async def route_ledgers(
    route_id: Optional[int] = None,
    class_name: Optional[str] = Query(None, alias="class"),
    ledger: FeeLedger = Depends(deps.get_ledger),
) -> Any:
    """Per-route monthly collection, driver payout and balance."""
    return SuccessResponse(data=await VehicleService.route_ledgers(ledger, route_id, class_name))


@router.put("/ledger/payouts", response_model=SuccessResponse[VehicleLedgerEntry])
async def set_driver_payout(body: DriverPayoutUpdate, ledger: FeeLedger = Depends(deps.get_ledger)) -> Any:
    entry = await VehicleService.set_paid_to_driver(
        ledger, body.route_id, body.month, body.paid_to_driver
    )
    return SuccessResponse(data=entry, message="Driver payout saved")
