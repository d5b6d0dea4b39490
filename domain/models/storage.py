"""
Storage entry model: one row per key of the key/value namespace.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from domain.models.database import Base


class StorageEntry(Base):
    __tablename__ = "storage_entry"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<StorageEntry key={self.key!r} size={len(self.value or '')}>"
