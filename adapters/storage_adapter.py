"""Key/value storage adapter backed by SQLAlchemy.

A flat namespace of string values addressed by string keys. The entity store
keeps one serialized collection per key; the auth layer keeps its session
next to them.
"""

from typing import List, Optional
import logging

from sqlalchemy import select, delete
from sqlalchemy.orm import sessionmaker

from domain.models import StorageEntry

logger = logging.getLogger("mealtrack.storage")


class KeyValueStorage:
    """
    String key/value store over the ``storage_entry`` table.

    Every call runs in its own session and commits before returning, so a
    ``set_item`` is durable once it returns.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    # ------------------ Reads ------------------
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value for ``key`` or None if the key is absent."""
        with self._session_factory() as db:
            entry = db.get(StorageEntry, key)
            return entry.value if entry is not None else None

    def keys(self) -> List[str]:
        with self._session_factory() as db:
            return list(db.scalars(select(StorageEntry.key).order_by(StorageEntry.key)))

    def __contains__(self, key: str) -> bool:
        return self.get_item(key) is not None

    # ------------------ Writes ------------------
    def set_item(self, key: str, value: str) -> None:
        """Insert or overwrite ``key``."""
        with self._session_factory() as db:
            try:
                entry = db.get(StorageEntry, key)
                if entry is None:
                    db.add(StorageEntry(key=key, value=value))
                else:
                    entry.value = value
                db.commit()
            except Exception:
                db.rollback()
                logger.exception("Error writing storage key %s", key)
                raise
        logger.debug(f"Stored key {key} ({len(value)} chars)")

    def remove_item(self, key: str) -> None:
        """Delete ``key``; removing an absent key is a no-op."""
        with self._session_factory() as db:
            db.execute(delete(StorageEntry).where(StorageEntry.key == key))
            db.commit()

    def clear(self) -> None:
        with self._session_factory() as db:
            db.execute(delete(StorageEntry))
            db.commit()
        logger.info("Storage cleared")
