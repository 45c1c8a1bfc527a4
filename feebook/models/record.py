"""Record store table: one JSON document per collection"""

from sqlalchemy import Column, Integer, String, JSON

from feebook.database import Base
from feebook.models.base import TimestampMixin


class StoredCollection(Base, TimestampMixin):
    """
    Whole-collection storage mirroring a key-value store.

    Each row holds the full ordered list of records for one collection
    (students, payments, ...) as a JSON array. ``version`` is bumped on every
    write; an UPDATE carrying a stale version matches no row and SQLAlchemy
    raises StaleDataError instead of overwriting the newer payload.
    """
    __tablename__ = "stored_collections"

    name = Column(String(64), primary_key=True)
    payload = Column(JSON, nullable=False, default=list)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        size = len(self.payload or [])
        return f"<StoredCollection {self.name} v{self.version} ({size} records)>"
