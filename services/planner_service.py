"""
Meal planning: generated plans, meal status and per-meal recipes and swaps.
"""

from typing import Any, Dict, List, Optional
from datetime import date, timedelta
import calendar
import json
import logging

import anyio

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import MealStatus, MealType
from repositories import (
    EntityStore,
    MealRepository,
    PantryRepository,
    ShoppingItemRepository,
)
from core.utils.helpers import current_month
from services.settings_service import SettingsService
from services import prompt_builder

logger = logging.getLogger("mealtrack.planner")

Record = Dict[str, Any]

# plan length options offered to the user: (days, text used in the prompt)
PLAN_PERIODS = {
    "week": (7, "week"),
    "14": (14, "14 days"),
}
MONTH_PERIOD = "month"
DEFAULT_FOOD_PREFERENCE = "kenyan"
DEFAULT_DIETARY_GOALS = ["balanced"]


def plan_length(period: str, anchor: date) -> tuple:
    """``(num_days, period_text)`` for a plan period; ``month`` spans the month of ``anchor``"""
    if period == MONTH_PERIOD:
        return calendar.monthrange(anchor.year, anchor.month)[1], "entire month"
    if period not in PLAN_PERIODS:
        raise ServiceValidationError(
            f"Unknown plan period {period!r}",
            details={"allowed": sorted(list(PLAN_PERIODS) + [MONTH_PERIOD])},
        )
    return PLAN_PERIODS[period]


class PlannerService:
    @staticmethod
    def build_plan_prompt(user_settings: Dict[str, Any], period: str, anchor: date,
                          avoid_repeats: bool = True, budget_aware: bool = True) -> str:
        num_days, period_text = plan_length(period, anchor)
        return prompt_builder.meal_plan_prompt(
            period_text,
            num_days,
            user_settings.get("food_preference") or DEFAULT_FOOD_PREFERENCE,
            float(user_settings.get("monthly_budget") or 0),
            avoid_repeats=avoid_repeats,
            budget_aware=budget_aware,
        )

    @staticmethod
    def plan_to_meals(plan: Dict[str, Any], start: date) -> List[Record]:
        """
        Flatten a ``{"days": [...]}`` plan into ``Meal`` field sets.

        Day ``i`` of the plan is dated ``start + i``; slots missing from a day
        are skipped.
        """
        meals = []
        for index, day in enumerate(plan.get("days") or []):
            if not isinstance(day, dict):
                continue
            day_str = (start + timedelta(days=index)).isoformat()
            for slot in MealType:
                option = day.get(slot.value)
                if not option:
                    continue
                meals.append({
                    "type": slot.value,
                    "date": day_str,
                    "name": option.get("name"),
                    "cost": option.get("cost"),
                    "prep_notes": option.get("prep_notes") or "",
                    "status": MealStatus.PENDING.value,
                })
        return meals

    @staticmethod
    async def generate_plan(store: EntityStore, integration, start: date, period: str = "week",
                            avoid_repeats: bool = True, budget_aware: bool = True) -> List[Record]:
        """
        Generate a meal plan and save its meals starting at ``start``.

        Args:
            store: Entity store
            integration: Content-generation integration (``invoke_llm``)
            start: Date of the first planned day
            period: ``week``, ``14`` or ``month``

        Returns:
            The created ``Meal`` records

        Raises:
            ServiceValidationError: If ``period`` is unknown
        """
        user_settings = await anyio.to_thread.run_sync(SettingsService.get_settings, store)
        prompt = PlannerService.build_plan_prompt(user_settings, period, start, avoid_repeats, budget_aware)
        plan = await integration.invoke_llm(prompt)
        meals = PlannerService.plan_to_meals(plan, start)
        if not meals:
            logger.warning("Meal plan generation returned no meals")
            return []
        created = await anyio.to_thread.run_sync(MealRepository(store).bulk_create, meals)
        logger.info(f"Planned {len(created)} meals from {start.isoformat()} ({period})")
        return created

    @staticmethod
    def toggle_meal_status(store: EntityStore, meal_id: str) -> Record:
        """
        Flip a meal between ``done`` and ``pending``; any other status becomes ``done``.

        Raises:
            NotFoundError: If the meal does not exist
        """
        meals = MealRepository(store)
        with store.locked(meals.entity_name):
            meal = meals.get_by_id(meal_id)
            if meal is None:
                raise NotFoundError(f"Meal {meal_id} not found")
            new_status = MealStatus.PENDING if meal.get("status") == MealStatus.DONE.value else MealStatus.DONE
            return meals.update(meal_id, {"status": new_status.value})

    @staticmethod
    def meals_for_month(store: EntityStore, month: Optional[str] = None) -> List[Record]:
        return MealRepository(store).get_by_month(month or current_month())

    @staticmethod
    def _get_meal(store: EntityStore, meal_id: str) -> Record:
        meal = MealRepository(store).get_by_id(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal {meal_id} not found")
        return meal

    @staticmethod
    async def get_recipe(store: EntityStore, integration, meal_id: str) -> Dict[str, Any]:
        """
        Recipe of a meal, generated on first request.

        A generated recipe that carries nutrition is saved on the meal as a
        JSON string in ``recipe`` together with its ``nutrition``.
        """
        meal = await anyio.to_thread.run_sync(PlannerService._get_meal, store, meal_id)
        if meal.get("recipe"):
            try:
                return json.loads(meal["recipe"])
            except (TypeError, ValueError):
                logger.warning(f"Regenerating unreadable recipe of meal {meal_id}")

        user_settings = await anyio.to_thread.run_sync(SettingsService.get_settings, store)
        pantry = await anyio.to_thread.run_sync(PantryRepository(store).list)
        recipe = await integration.invoke_llm(prompt_builder.recipe_prompt(
            meal,
            user_settings.get("food_preference") or DEFAULT_FOOD_PREFERENCE,
            user_settings.get("dietary_goals") or DEFAULT_DIETARY_GOALS,
            pantry,
        ))
        if recipe.get("nutrition"):
            await anyio.to_thread.run_sync(
                MealRepository(store).update,
                meal_id,
                {"recipe": json.dumps(recipe), "nutrition": recipe["nutrition"]},
            )
        return recipe

    @staticmethod
    def add_missing_to_shopping(store: EntityStore, recipe: Dict[str, Any],
                                today: Optional[date] = None) -> List[Record]:
        """Put the recipe ingredients not marked ``in_pantry`` on this month's shopping list"""
        missing = [i for i in recipe.get("ingredients") or [] if not i.get("in_pantry")]
        if not missing:
            return []
        month = current_month(today)
        return ShoppingItemRepository(store).bulk_create([
            {
                "name": ing.get("name"),
                "quantity": ing.get("quantity"),
                "category": "misc",
                "month": month,
                "purchased": False,
                "price": 0,
            }
            for ing in missing
        ])

    @staticmethod
    async def suggest_swaps(store: EntityStore, integration, meal_id: str) -> List[Dict[str, Any]]:
        """Cheaper or pantry-friendlier alternatives for a meal"""
        meal = await anyio.to_thread.run_sync(PlannerService._get_meal, store, meal_id)
        user_settings = await anyio.to_thread.run_sync(SettingsService.get_settings, store)
        pantry = await anyio.to_thread.run_sync(PantryRepository(store).list)
        result = await integration.invoke_llm(prompt_builder.meal_swap_prompt(
            meal,
            user_settings.get("food_preference") or DEFAULT_FOOD_PREFERENCE,
            user_settings.get("dietary_goals") or DEFAULT_DIETARY_GOALS,
            pantry,
        ))
        return result.get("suggestions") or []

    @staticmethod
    def apply_swap(store: EntityStore, meal_id: str, suggestion: Dict[str, Any]) -> Record:
        """Replace a meal's name and cost with a chosen suggestion"""
        updated = MealRepository(store).update(meal_id, {
            "name": suggestion.get("name"),
            "cost": suggestion.get("estimated_cost"),
        })
        if updated is None:
            raise NotFoundError(f"Meal {meal_id} not found")
        return updated
