"""Time Utilities for UTC management"""

from datetime import date, datetime, timezone
from typing import Optional, Tuple


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime.
    Matches the stored_collections schema (TIMESTAMP WITHOUT TIME ZONE).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_today() -> date:
    return get_utc_now().date()


def undated_first(value: Optional[date]) -> Tuple[bool, date]:
    """Sort key placing missing dates ahead of every real date"""
    return value is not None, value or date.min
