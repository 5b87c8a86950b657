"""
Base model class with common fields and lifecycle hooks
"""

from datetime import datetime, timedelta

from sqlalchemy import Column, DateTime, Integer

from eventmgmt.core.database import Base


class BaseModel(Base):
    """
    Abstract base model with common fields.

    ``on_create`` and ``on_update`` are the lifecycle hooks. The service
    layer calls each exactly once per write, inside the write's transaction.
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def apply_defaults(self) -> None:
        """Fill documented defaults for fields left unset at creation"""

    def on_create(self, now: datetime) -> None:
        self.created_at = now
        self.updated_at = now
        self.apply_defaults()

    def on_update(self, now: datetime) -> None:
        # updated_at must move forward even when the clock has not
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def dict(self):
        """Convert model to dictionary keyed by attribute name"""
        return {
            attr.key: getattr(self, attr.key)
            for attr in self.__mapper__.column_attrs
        }
