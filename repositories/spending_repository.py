"""
Spending Repository - Data access layer for recorded household spending
"""

from typing import List

from repositories.base import BaseRepository
from repositories.entity_repository import Record
from domain.enums import EntityName
from core.utils.helpers import to_amount


class SpendingRecordRepository(BaseRepository):
    """Repository for spending records (``amount`` tagged with a ``month``)"""

    entity_name = EntityName.SPENDING_RECORD.value

    def get_by_month(self, month: str) -> List[Record]:
        return self.filter({"month": month})

    def total_for_month(self, month: str) -> float:
        """Sum of ``amount`` over one month; missing amounts count as 0"""
        return sum(to_amount(r.get("amount")) for r in self.get_by_month(month))
