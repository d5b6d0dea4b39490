from typing import Any, Dict, Mapping
import logging

from app.config import settings as app_settings
from repositories import EntityStore, SettingsRepository

logger = logging.getLogger("mealtrack.settings")

DEFAULT_NUTRITION_GOALS = {
    "daily_calories": 2000,
    "daily_protein": 60,
    "daily_carbs": 250,
    "daily_fats": 70,
    "daily_fiber": 25,
}


class SettingsService:
    @staticmethod
    def get_settings(store: EntityStore) -> Dict[str, Any]:
        """
        Household settings with defaults filled in.

        Reads the first ``UserSettings`` record; if there is none, returns the
        defaults without persisting anything.
        """
        current = SettingsRepository(store).get_current() or {}
        merged = {"monthly_budget": app_settings.default_monthly_budget, **current}
        merged["nutrition_goals"] = {**DEFAULT_NUTRITION_GOALS, **(current.get("nutrition_goals") or {})}
        merged.setdefault("alert_preferences", {})
        merged.setdefault("budget_allocation", {})
        if not merged.get("monthly_budget"):
            merged["monthly_budget"] = app_settings.default_monthly_budget
        return merged

    @staticmethod
    def update_settings(store: EntityStore, patch: Mapping[str, Any]) -> Dict[str, Any]:
        """Shallow-merge ``patch`` into the settings record (created if missing)"""
        record = SettingsRepository(store).upsert(patch)
        logger.info(f"Settings updated: {sorted(patch.keys())}")
        return record

    @staticmethod
    def monthly_budget(store: EntityStore) -> float:
        return float(SettingsService.get_settings(store)["monthly_budget"])
