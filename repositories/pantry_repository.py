"""
Pantry Repository - Data access layer for pantry inventory
"""

from typing import Optional

from repositories.base import BaseRepository
from repositories.entity_repository import Record
from domain.enums import EntityName


class PantryRepository(BaseRepository):
    """Repository for pantry items"""

    entity_name = EntityName.PANTRY_ITEM.value

    def get_by_name(self, name: str) -> Optional[Record]:
        """Get the first pantry item whose name matches case-insensitively"""
        wanted = (name or "").lower()
        for item in self.list():
            if str(item.get("name") or "").lower() == wanted:
                return item
        return None
