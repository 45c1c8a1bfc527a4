"""One-shot upgrades of stored records to the current shapes"""

from typing import Any, Dict, List, Tuple

from feebook.core.logging import get_logger
from feebook.models.enums import ACADEMIC_MONTHS, Collection
from feebook.services.record_store import RecordStore

logger = get_logger(__name__)

LEGACY_ROUTE_FIELD = "routeId"


def is_legacy_assignment(record: Dict[str, Any]) -> bool:
    """Old assignments carried one routeId for the whole year"""
    return LEGACY_ROUTE_FIELD in record


def upgrade_assignment(record: Dict[str, Any]) -> Dict[str, Any]:
    """Copy the assignment-level route into every month, keeping fee/paid"""
    route_id = record.get(LEGACY_ROUTE_FIELD)
    old_months = record.get("monthlyFees") or {}
    upgraded = {k: v for k, v in record.items() if k != LEGACY_ROUTE_FIELD}
    monthly_fees = {}
    for month in ACADEMIC_MONTHS:
        old = old_months.get(month) or {}
        monthly_fees[month] = {
            "routeId": route_id,
            "fee": old.get("fee", 0),
            "paid": old.get("paid", 0),
        }
    upgraded["monthlyFees"] = monthly_fees
    return upgraded


def migrate_vehicle_assignments(records: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], bool]:
    """
    Rewrite legacy assignments into the per-month route shape.

    Records already in the new shape are returned untouched, so running this
    on migrated data is a no-op.
    """
    if not any(is_legacy_assignment(r) for r in records):
        return records, False
    return [upgrade_assignment(r) if is_legacy_assignment(r) else r for r in records], True


async def run_migrations(store: RecordStore) -> bool:
    """Apply pending record upgrades; returns True when anything was rewritten"""
    records = await store.load(Collection.VEHICLE_ASSIGNMENTS)
    migrated, changed = migrate_vehicle_assignments(records)
    if changed:
        legacy = sum(1 for r in records if is_legacy_assignment(r))
        logger.info("Migrating legacy vehicle assignments", extra={"records": legacy})
        await store.save(Collection.VEHICLE_ASSIGNMENTS, migrated)
        logger.info("Vehicle assignment migration complete")
    return changed
