"""Base Models and Mixins"""

from sqlalchemy import Column, DateTime

from feebook.utils.time import get_utc_now


class TimestampMixin:
    """
    Mixin for tables that track write times.

    Provides:
    - created_at timestamp
    - updated_at timestamp
    """
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)
