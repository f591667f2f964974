from sqlalchemy import Column, String, LargeBinary, DateTime, Index
from sqlalchemy.orm import declarative_base

from shared.utils import now

Base = declarative_base()


class KeyValueEntry(Base):
    """One durable key-value pair.

    Drafts, metadata records, closed/report flags and the active-activity pointer
    all live in this single table; values are opaque bytes (JSON in practice).
    """
    __tablename__ = 'kv_store'
    key = Column(String(300), primary_key=True, nullable=False)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, default=now, onupdate=now)

Index('idx_kv_store_updated_at', KeyValueEntry.updated_at)
