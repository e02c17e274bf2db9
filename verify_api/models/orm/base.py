from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class CreatedOnMixin:
    # Rows are append-only, so there is no updated_on column.
    created_at = Column(DateTime, default=utc_now, server_default=func.now())
