"""
Settings Repository - Data access layer for the household settings record
"""

from typing import Any, Mapping, Optional

from repositories.base import BaseRepository
from repositories.entity_repository import Record
from domain.enums import EntityName


class SettingsRepository(BaseRepository):
    """
    Repository for ``UserSettings``.

    The collection is read as a singleton (its first record); the store does
    not enforce that, so writes go through ``upsert`` which only creates a
    record when none exists.
    """

    entity_name = EntityName.USER_SETTINGS.value

    def get_current(self) -> Optional[Record]:
        records = self.list()
        return records[0] if records else None

    def upsert(self, patch: Mapping[str, Any]) -> Record:
        """Update the settings record, creating it if the collection is empty"""
        with self.store.locked(self.entity_name):
            current = self.get_current()
            if current is None:
                return self.create(patch)
            return self.update(current["id"], patch)
