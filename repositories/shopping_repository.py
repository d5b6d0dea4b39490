"""
Shopping Repository - Data access layer for shopping list items
"""

from typing import List

from repositories.base import BaseRepository
from repositories.entity_repository import Record
from domain.enums import EntityName


class ShoppingItemRepository(BaseRepository):
    """Repository for shopping list items (one list per month)"""

    entity_name = EntityName.SHOPPING_ITEM.value

    def get_by_month(self, month: str) -> List[Record]:
        return self.filter({"month": month})

    def get_purchased(self, month: str) -> List[Record]:
        return self.filter({"purchased": True, "month": month})
