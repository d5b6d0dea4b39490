from typing import Any, Dict, List, Optional
from datetime import date, timedelta
import logging

from app.config import settings as app_settings
from domain.enums import AlertType
from repositories import (
    EntityStore,
    MealRepository,
    PantryRepository,
    ShoppingItemRepository,
)
from core.utils.helpers import current_month, parse_date, parse_float, to_amount, format_number
from services.settings_service import SettingsService

logger = logging.getLogger("mealtrack.alerts")

Record = Dict[str, Any]

DEFAULT_EXPIRY_DAYS_BEFORE = 3
UPCOMING_MEAL_DAYS = 7


def _alert(alert_type: AlertType, message: str, link: str, priority: int) -> Dict[str, Any]:
    return {"type": alert_type.value, "message": message, "link": link, "priority": priority}


def _enabled(prefs: Dict[str, Any], key: str) -> bool:
    # only an explicit False turns a category off
    return prefs.get(key) is not False


class AlertsService:
    @staticmethod
    def expiry_alerts(pantry: List[Record], today: date, days_before: int) -> List[Dict[str, Any]]:
        alerts = []
        for item in pantry:
            expiry = parse_date(item.get("expiry_date"))
            if expiry is None:
                continue
            days_left = (expiry - today).days
            if 0 <= days_left <= days_before:
                plural = "" if days_left == 1 else "s"
                alerts.append(_alert(
                    AlertType.EXPIRY,
                    f"{item.get('name')} expires in {days_left} day{plural}",
                    "Pantry",
                    3 if days_left == 0 else 2,
                ))
            elif days_left < 0:
                alerts.append(_alert(AlertType.EXPIRY, f"{item.get('name')} has expired", "Pantry", 3))
        return alerts

    @staticmethod
    def low_stock_alerts(pantry: List[Record]) -> List[Dict[str, Any]]:
        alerts = []
        for item in pantry:
            if not item.get("quantity") or not item.get("low_stock_threshold"):
                continue
            quantity = parse_float(item.get("quantity"))
            threshold = parse_float(item.get("low_stock_threshold"))
            if quantity is None or threshold is None or quantity > threshold:
                continue
            alerts.append(_alert(
                AlertType.LOW_STOCK,
                f"{item.get('name')} is running low ({item.get('quantity')} {item.get('unit') or ''} left)",
                "Pantry",
                1,
            ))
        return alerts

    @staticmethod
    def budget_alerts(shopping: List[Record], budget: float, allocation: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Monthly over-budget / 90% warnings and per-category allocation warnings"""
        alerts = []
        cur = app_settings.currency
        total = sum(to_amount(i.get("price")) for i in shopping)
        percent = total / budget * 100 if budget > 0 else 0
        if total > budget:
            alerts.append(_alert(
                AlertType.OVER_BUDGET,
                f"You're {cur} {total - budget:.0f} over budget this month",
                "Shopping",
                3,
            ))
        elif percent >= 90:
            alerts.append(_alert(
                AlertType.BUDGET, f"You've used {percent:.0f}% of your monthly budget", "Shopping", 2
            ))

        by_category: Dict[str, float] = {}
        for item in shopping:
            key = str(item.get("category"))
            by_category[key] = by_category.get(key, 0) + to_amount(item.get("price"))
        for category, spent in by_category.items():
            allocated = to_amount(allocation.get(category))
            if allocated > 0 and spent > allocated * 0.9:
                alerts.append(_alert(
                    AlertType.BUDGET,
                    f"{category} category nearing limit: {cur} {format_number(spent)}/{format_number(allocated)}",
                    "Shopping",
                    1,
                ))
        return alerts

    @staticmethod
    def prep_alerts(meals: List[Record], today: date) -> List[Dict[str, Any]]:
        tomorrow = (today + timedelta(days=1)).isoformat()
        return [
            _alert(AlertType.PREP, f"Prep for tomorrow's {m.get('type')}: {m['prep_notes']}", "Planner", 1)
            for m in meals
            if str(m.get("date") or "")[:10] == tomorrow and m.get("prep_notes")
        ]

    @staticmethod
    def build_alerts(
        pantry: List[Record],
        shopping: List[Record],
        meals: List[Record],
        user_settings: Dict[str, Any],
        today: date,
    ) -> List[Dict[str, Any]]:
        """
        Assemble dashboard alerts from pantry, this month's shopping and upcoming meals.

        Each category can be switched off in ``alert_preferences``
        (``expiry_alerts``, ``low_stock_alerts``, ``budget_alerts``,
        ``meal_prep_reminders``). Alerts come back highest priority first;
        equal priorities keep their insertion order.
        """
        prefs = user_settings.get("alert_preferences") or {}
        alerts: List[Dict[str, Any]] = []
        if _enabled(prefs, "expiry_alerts"):
            days_before = int(to_amount(prefs.get("expiry_days_before")) or DEFAULT_EXPIRY_DAYS_BEFORE)
            alerts.extend(AlertsService.expiry_alerts(pantry, today, days_before))
        if _enabled(prefs, "low_stock_alerts"):
            alerts.extend(AlertsService.low_stock_alerts(pantry))
        if _enabled(prefs, "budget_alerts"):
            budget = to_amount(user_settings.get("monthly_budget")) or app_settings.default_monthly_budget
            alerts.extend(AlertsService.budget_alerts(
                shopping, budget, user_settings.get("budget_allocation") or {}
            ))
        if _enabled(prefs, "meal_prep_reminders"):
            alerts.extend(AlertsService.prep_alerts(meals, today))
        return sorted(alerts, key=lambda a: a["priority"], reverse=True)

    @staticmethod
    def get_alerts(store: EntityStore, today: Optional[date] = None) -> List[Dict[str, Any]]:
        today = today or date.today()
        meals = MealRepository(store).get_between(today, today + timedelta(days=UPCOMING_MEAL_DAYS))
        alerts = AlertsService.build_alerts(
            PantryRepository(store).list(),
            ShoppingItemRepository(store).get_by_month(current_month(today)),
            meals,
            SettingsService.get_settings(store),
            today,
        )
        logger.debug(f"Built {len(alerts)} alerts for {today.isoformat()}")
        return alerts
