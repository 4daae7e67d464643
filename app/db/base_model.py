from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, String
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Opaque record identifier shared by both storage backings."""
    return uuid4().hex


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamps on every dialect.

    SQLite drops tzinfo on the way in; it is restored on the way out.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class BaseModel:
    """Base class for all database models."""

    id = Column(String(32), primary_key=True, default=new_id, index=True)

    # Timestamps
    createdAt = Column(UTCDateTime, default=utcnow, nullable=False, index=True)
    updatedAt = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)
