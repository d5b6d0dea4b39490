from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from domain.enums import MealStatus, MealType
from repositories import (
    EntityStore,
    MealRepository,
    ShoppingItemRepository,
    SpendingRecordRepository,
)
from core.utils.helpers import current_month, format_clock_time, to_amount
from services.settings_service import SettingsService

logger = logging.getLogger("mealtrack.dashboard")

Record = Dict[str, Any]

DEFAULT_MEAL_TIMES = {
    MealType.BREAKFAST.value: "07:00",
    MealType.LUNCH.value: "13:00",
    MealType.DINNER.value: "20:00",
}
LOW_BUDGET_THRESHOLD = 1000


class DashboardService:
    @staticmethod
    def next_meal_type(hour: int) -> MealType:
        """Slot coming up at ``hour``: breakfast before 10, lunch before 15, dinner after"""
        if hour < 10:
            return MealType.BREAKFAST
        if hour < 15:
            return MealType.LUNCH
        return MealType.DINNER

    @staticmethod
    def meal_for_slot(meals: List[Record], meal_type: str) -> Optional[Record]:
        for meal in meals:
            if meal.get("type") == meal_type:
                return meal
        return None

    @staticmethod
    def summary(store: EntityStore, now: datetime) -> Dict[str, Any]:
        """
        Today's view of the household.

        Args:
            store: Entity store
            now: Local wall-clock time the view is built for

        Returns:
            Dict with today's schedule (one entry per slot), the next meal,
            completed meals and cost of today, and this month's recorded
            spending against the budget
        """
        today = now.date()
        month = current_month(today)
        user_settings = SettingsService.get_settings(store)
        meals = MealRepository(store).get_by_date(today)
        next_type = DashboardService.next_meal_type(now.hour).value

        schedule = []
        for meal_type in MealType:
            meal = DashboardService.meal_for_slot(meals, meal_type.value)
            status = (meal or {}).get("status") or MealStatus.PENDING.value
            schedule.append({
                "type": meal_type.value,
                "time": format_clock_time(
                    user_settings.get(f"{meal_type.value}_time") or DEFAULT_MEAL_TIMES[meal_type.value]
                ),
                "status": status,
                "meal": meal,
                "is_next": meal_type.value == next_type and status != MealStatus.DONE.value,
            })
        upcoming = next(s for s in schedule if s["type"] == next_type)

        spent = SpendingRecordRepository(store).total_for_month(month)
        budget = float(user_settings["monthly_budget"])
        remaining = budget - spent
        low_stock = ShoppingItemRepository(store).filter({"low_stock": True})

        logger.debug(f"Dashboard for {today}: {len(meals)} meals, {spent} spent in {month}")
        return {
            "date": today.isoformat(),
            "month": month,
            "schedule": schedule,
            "next_meal": {"type": next_type, "time": upcoming["time"], "meal": upcoming["meal"]},
            "meals_completed": sum(1 for m in meals if m.get("status") == MealStatus.DONE.value),
            "today_cost": sum(to_amount(m.get("cost")) for m in meals),
            "month_spent": spent,
            "monthly_budget": budget,
            "budget_remaining": remaining,
            "is_budget_low": 0 < remaining < LOW_BUDGET_THRESHOLD,
            "low_stock_count": len(low_stock),
        }
