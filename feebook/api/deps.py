"""API Dependencies"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from feebook.database import get_db
from feebook.services.fee_ledger import FeeLedger
from feebook.services.record_store import RecordStore, SqlRecordStore

READ_ONLY_METHODS = ("GET", "HEAD", "OPTIONS")


async def get_record_store(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> RecordStore:
    """Record store bound to the request's database session; writes lock what they read"""
    return SqlRecordStore(db, lock_for_update=request.method not in READ_ONLY_METHODS)


async def get_ledger(store: RecordStore = Depends(get_record_store)) -> FeeLedger:
    """
    Fresh ledger per request.

    The fee entry cache lives on this object, so it never outlives the
    request that filled it.
    """
    return FeeLedger(store)
