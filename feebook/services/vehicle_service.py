"""Vehicle Service - routes, per-month assignments and route ledgers"""

from typing import Dict, List, Optional, Tuple

from feebook.core.exceptions import NotFoundError, ValidationError
from feebook.core.logging import get_logger
from feebook.models.enums import ACADEMIC_MONTHS, Collection
from feebook.schemas.catalog import RouteCreate
from feebook.schemas.ledger import (
    ConsistencyWarning,
    RouteLedger,
    RouteMonthTotals,
    RouteStudentMonth,
    RouteStudentRow,
)
from feebook.schemas.records import (
    MonthlyFee,
    Route,
    Student,
    VehicleAssignment,
    VehicleLedgerEntry,
)
from feebook.services.fee_ledger import FeeLedger

logger = get_logger(__name__)


def build_route_ledger(
    route: Route,
    assignments: List[VehicleAssignment],
    students: List[Student],
    ledger_entries: List[VehicleLedgerEntry],
    months: Tuple[str, ...] = ACADEMIC_MONTHS,
    class_name: Optional[str] = None,
) -> RouteLedger:
    """
    Collection vs driver payout for one route, month by month.

    Collection counts every assignment-month on the route; the class filter
    only narrows the student rows. A negative balance (driver paid more than
    was collected) is reported, not rejected.
    """
    students_by_id = {s.id: s for s in students}
    payouts: Dict[Tuple[int, str], float] = {
        (e.route_id, e.month): e.paid_to_driver for e in ledger_entries
    }

    collection = {month: 0.0 for month in months}
    rows: List[RouteStudentRow] = []
    for assignment in assignments:
        if not assignment.is_on_route(route.id):
            continue

        cells: Dict[str, Optional[RouteStudentMonth]] = {}
        student_paid = 0.0
        for month in months:
            month_fee = assignment.monthly_fees.get(month)
            if month_fee is None or month_fee.route_id != route.id:
                cells[month] = None
                continue
            collection[month] += month_fee.paid
            student_paid += month_fee.paid
            cells[month] = RouteStudentMonth(fee=month_fee.fee, paid=month_fee.paid)

        student = students_by_id.get(assignment.student_id)
        if student is None:
            continue
        if class_name and class_name != "All" and student.class_name != class_name:
            continue
        rows.append(RouteStudentRow(
            assignment_id=assignment.id,
            student_id=student.id,
            student_name=student.name,
            student_class=student.class_name,
            months=cells,
            total_paid=student_paid,
        ))

    month_totals = []
    warnings = []
    for month in months:
        paid_to_driver = payouts.get((route.id, month), 0)
        balance = collection[month] - paid_to_driver
        month_totals.append(RouteMonthTotals(
            month=month,
            collection=collection[month],
            paid_to_driver=paid_to_driver,
            balance=balance,
            is_overpaid=balance < 0,
        ))
        if balance < 0:
            warnings.append(ConsistencyWarning(
                code="NEGATIVE_ROUTE_BALANCE",
                message=f"Route {route.name}: driver paid {-balance:.2f} more than collected in {month}",
            ))

    if warnings:
        logger.warning(
            "Route paid out more than it collected",
            extra={"route_id": route.id, "months": [m.month for m in month_totals if m.is_overpaid]},
        )

    return RouteLedger(
        route_id=route.id,
        route_name=route.name,
        driver=route.driver,
        students=rows,
        months=month_totals,
        total_collection=sum(m.collection for m in month_totals),
        total_paid_to_driver=sum(m.paid_to_driver for m in month_totals),
        total_balance=sum(m.balance for m in month_totals),
        warnings=warnings,
    )


def _check_month(month: str) -> None:
    if month not in ACADEMIC_MONTHS:
        raise ValidationError(f"Unknown month '{month}'. Expected one of {', '.join(ACADEMIC_MONTHS)}.")


class VehicleService:
    @staticmethod
    async def list_routes(ledger: FeeLedger) -> List[Route]:
        return await ledger.routes()

    @staticmethod
    async def get_route(ledger: FeeLedger, route_id: int) -> Route:
        for route in await ledger.routes():
            if route.id == route_id:
                return route
        raise NotFoundError("Route", route_id)

    @staticmethod
    async def create_route(ledger: FeeLedger, data: RouteCreate) -> Route:
        routes = await ledger.routes()
        route = Route(
            id=await ledger.next_id(Collection.ROUTES),
            name=data.name.strip(),
            driver=data.driver.strip(),
        )
        routes.append(route)
        await ledger.save(Collection.ROUTES, routes)
        return route

    @staticmethod
    async def delete_route(ledger: FeeLedger, route_id: int) -> int:
        """Remove a route; months that used it become unassigned. Returns months cleared."""
        routes = await ledger.routes()
        remaining = [r for r in routes if r.id != route_id]
        if len(remaining) == len(routes):
            raise NotFoundError("Route", route_id)

        assignments = await ledger.vehicle_assignments()
        cleared = 0
        for assignment in assignments:
            for month_fee in assignment.monthly_fees.values():
                if month_fee.route_id == route_id:
                    month_fee.route_id = None
                    month_fee.fee = 0
                    month_fee.paid = 0
                    cleared += 1

        await ledger.save(Collection.ROUTES, remaining)
        await ledger.save(Collection.VEHICLE_ASSIGNMENTS, assignments)
        logger.info("Route deleted", extra={"route_id": route_id, "months_cleared": cleared})
        return cleared

    @staticmethod
    async def list_assignments(ledger: FeeLedger) -> List[VehicleAssignment]:
        return await ledger.vehicle_assignments()

    @staticmethod
    async def unassigned_students(ledger: FeeLedger) -> List[Student]:
        assigned = {a.student_id for a in await ledger.vehicle_assignments()}
        return [s for s in await ledger.students() if s.id not in assigned]

    @staticmethod
    async def assign_student(
        ledger: FeeLedger,
        student_id: int,
        route_id: int,
        monthly_fee: float,
    ) -> VehicleAssignment:
        """Put a student on one route for the whole cycle at a flat monthly fee"""
        if await ledger.student(student_id) is None:
            raise NotFoundError("Student", student_id)
        await VehicleService.get_route(ledger, route_id)
        if monthly_fee < 0:
            raise ValidationError("Monthly fee cannot be negative.")

        assignments = await ledger.vehicle_assignments()
        if any(a.student_id == student_id for a in assignments):
            raise ValidationError(f"Student {student_id} already has a vehicle assignment.")

        assignment = VehicleAssignment(
            id=await ledger.next_id(Collection.VEHICLE_ASSIGNMENTS),
            student_id=student_id,
            monthly_fees={
                month: MonthlyFee(route_id=route_id, fee=monthly_fee, paid=0)
                for month in ACADEMIC_MONTHS
            },
        )
        assignments.append(assignment)
        await ledger.save(Collection.VEHICLE_ASSIGNMENTS, assignments)
        return assignment

    @staticmethod
    async def update_months(
        ledger: FeeLedger,
        assignment_id: int,
        route_id: int,
        fee: float,
        months: List[str],
    ) -> VehicleAssignment:
        """Move the selected months to a route/fee; paid amounts are kept"""
        if not months:
            raise ValidationError("Select at least one month to apply changes.")
        for month in months:
            _check_month(month)
        if fee < 0:
            raise ValidationError("Monthly fee cannot be negative.")
        await VehicleService.get_route(ledger, route_id)

        assignments = await ledger.vehicle_assignments()
        assignment = next((a for a in assignments if a.id == assignment_id), None)
        if assignment is None:
            raise NotFoundError("Vehicle assignment", assignment_id)

        for month in months:
            month_fee = assignment.monthly_fees[month]
            month_fee.route_id = route_id
            month_fee.fee = fee

        await ledger.save(Collection.VEHICLE_ASSIGNMENTS, assignments)
        return assignment

    @staticmethod
    async def set_paid_to_driver(
        ledger: FeeLedger,
        route_id: int,
        month: str,
        amount: float,
    ) -> VehicleLedgerEntry:
        _check_month(month)
        if amount < 0:
            raise ValidationError("Amount paid to driver cannot be negative.")
        await VehicleService.get_route(ledger, route_id)

        entries = await ledger.vehicle_ledger()
        entry = next((e for e in entries if e.route_id == route_id and e.month == month), None)
        if entry is None:
            entry = VehicleLedgerEntry(route_id=route_id, month=month, paid_to_driver=amount)
            entries.append(entry)
        else:
            entry.paid_to_driver = amount

        await ledger.save(Collection.VEHICLE_LEDGER, entries)
        return entry

    @staticmethod
    async def route_ledgers(
        ledger: FeeLedger,
        route_id: Optional[int] = None,
        class_name: Optional[str] = None,
    ) -> List[RouteLedger]:
        routes = await ledger.routes()
        if route_id is not None:
            routes = [r for r in routes if r.id == route_id]
            if not routes:
                raise NotFoundError("Route", route_id)

        assignments = await ledger.vehicle_assignments()
        students = await ledger.students()
        payouts = await ledger.vehicle_ledger()
        return [
            build_route_ledger(route, assignments, students, payouts, ledger.calendar.months, class_name)
            for route in routes
        ]
