"""Record Store - whole-collection persistence behind the ledger"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from feebook.core.exceptions import ConflictError
from feebook.core.logging import get_logger
from feebook.models.enums import Collection
from feebook.models.record import StoredCollection

logger = get_logger(__name__)

CollectionName = Union[Collection, str]


def _key(name: CollectionName) -> str:
    return name.value if isinstance(name, Collection) else name


class RecordStore(ABC):
    """
    Key-value persistence of ordered record collections.

    Records are JSON-ready values (dicts for most collections, plain strings
    for classes). Loaded lists are copies: mutating them does not touch the
    store until ``save`` is called.
    """

    @abstractmethod
    async def load(self, name: CollectionName) -> List[Any]:
        ...

    @abstractmethod
    async def save(self, name: CollectionName, records: List[Any]) -> None:
        ...

    async def next_id(self, name: CollectionName) -> int:
        """max(id) + 1 within the collection, or 1 when it is empty"""
        ids = [
            r["id"] for r in await self.load(name)
            if isinstance(r, dict) and isinstance(r.get("id"), int)
        ]
        return max(ids) + 1 if ids else 1

    async def find_by_id(self, name: CollectionName, record_id: int) -> Optional[Dict[str, Any]]:
        for record in await self.load(name):
            if isinstance(record, dict) and record.get("id") == record_id:
                return record
        return None


class InMemoryRecordStore(RecordStore):
    """Dict-backed store; used by tests and scripts"""

    def __init__(self, initial: Optional[Dict[CollectionName, List[Any]]] = None):
        self._data: Dict[str, List[Any]] = {}
        for name, records in (initial or {}).items():
            self._data[_key(name)] = copy.deepcopy(list(records))

    async def load(self, name: CollectionName) -> List[Any]:
        return copy.deepcopy(self._data.get(_key(name), []))

    async def save(self, name: CollectionName, records: List[Any]) -> None:
        self._data[_key(name)] = copy.deepcopy(list(records))

    def dump(self) -> Dict[str, List[Any]]:
        return copy.deepcopy(self._data)


class SqlRecordStore(RecordStore):
    """
    Store backed by the stored_collections table; commit is left to the session owner.

    Every save is checked against the row version read by this session, so a
    writer working from stale records gets ConflictError instead of silently
    replacing a newer payload. With ``lock_for_update`` the rows are also read
    with SELECT ... FOR UPDATE, which serializes writers on backends that
    support row locks (SQLite ignores the clause and relies on the version).
    """

    def __init__(self, db: AsyncSession, lock_for_update: bool = False):
        self.db = db
        self.lock_for_update = lock_for_update
        # Version of each row when this store first read it; None if it was missing
        self._read_versions: Dict[str, Optional[int]] = {}

    async def _row(self, key: str) -> Optional[StoredCollection]:
        query = select(StoredCollection).where(StoredCollection.name == key)
        if self.lock_for_update:
            query = query.with_for_update()
        try:
            result = await self.db.execute(query)
        except (StaleDataError, OperationalError) as exc:
            # Lock timeout or deadlock while waiting on the row
            raise ConflictError(key) from exc
        row = result.scalar_one_or_none()
        self._read_versions.setdefault(key, row.version if row is not None else None)
        return row

    async def load(self, name: CollectionName) -> List[Any]:
        row = await self._row(_key(name))
        if row is None or row.payload is None:
            return []
        return copy.deepcopy(row.payload)

    async def save(self, name: CollectionName, records: List[Any]) -> None:
        key = _key(name)
        payload = copy.deepcopy(list(records))
        row = await self._row(key)
        if row is None:
            row = StoredCollection(name=key, payload=payload)
            self.db.add(row)
        elif self._read_versions[key] is None:
            # Another writer created it after this store found it missing
            raise ConflictError(key)
        else:
            # Assign a new list so the JSON column is flagged as changed
            row.payload = payload
        try:
            await self.db.flush()
        except (StaleDataError, IntegrityError, OperationalError) as exc:
            logger.warning("Stale write rejected", extra={"collection": key})
            raise ConflictError(key) from exc
        self._read_versions[key] = row.version

    async def ensure_collections(self) -> List[str]:
        """Insert an empty row for every known collection that has none yet"""
        result = await self.db.execute(select(StoredCollection.name))
        existing = set(result.scalars().all())
        missing = [c.value for c in Collection if c.value not in existing]
        for key in missing:
            self.db.add(StoredCollection(name=key, payload=[]))
        if missing:
            try:
                await self.db.flush()
            except IntegrityError as exc:
                raise ConflictError(", ".join(missing)) from exc
            logger.info("Seeded record collections", extra={"collections": missing})
        return missing
