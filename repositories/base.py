"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Optional
from abc import ABC

from repositories.entity_repository import EntityClient, EntityStore, Record


class BaseRepository(EntityClient, ABC):
    """
    Base repository bound to one collection of the entity store.
    All repositories should inherit from this class and set ``entity_name``.
    """

    entity_name: str = ""

    def __init__(self, store: EntityStore):
        if not self.entity_name:
            raise NotImplementedError(f"{self.__class__.__name__} must define entity_name")
        super().__init__(store, self.entity_name)

    def get_by_id(self, record_id: str) -> Optional[Record]:
        """Get record by id, or None if not found"""
        for record in self.list():
            if record.get("id") == record_id:
                return record
        return None

    def count(self) -> int:
        return len(self.list())
