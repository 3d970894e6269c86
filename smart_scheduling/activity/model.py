"""StoredValue ORM model - key/value rows backing the SQL store."""

from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.orm import declarative_base

StoreBase = declarative_base()


class StoredValue(StoreBase):
    """Database model for one serialized value under a logical key."""
    __tablename__ = 'kv_store'

    key = Column(String(255), primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, nullable=False)
