"""
Meal Repository - Data access layer for planned meals
"""

from datetime import date
from typing import List

from repositories.base import BaseRepository
from repositories.entity_repository import Record
from domain.enums import EntityName


class MealRepository(BaseRepository):
    """Repository for planned meals"""

    entity_name = EntityName.MEAL.value

    def get_by_date(self, day: date) -> List[Record]:
        """Get meals planned on one day"""
        return self.filter({"date": day.isoformat()})

    def get_by_month(self, month: str) -> List[Record]:
        """Get meals whose ``date`` falls in ``YYYY-MM``"""
        return [m for m in self.list() if str(m.get("date") or "").startswith(month)]

    def get_between(self, start: date, end: date) -> List[Record]:
        """Get meals dated within [start, end] (ISO strings compare chronologically)"""
        lo, hi = start.isoformat(), end.isoformat()
        return [m for m in self.list() if m.get("date") and lo <= str(m["date"])[:10] <= hi]
