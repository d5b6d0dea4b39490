from typing import Any, Dict, List, Optional
from datetime import date, timedelta
import csv
import io
import logging
import math

import anyio

from domain.enums import BudgetPeriod, MealStatus, MealType
from repositories import (
    EntityStore,
    MealRepository,
    PantryRepository,
    ShoppingItemRepository,
)
from core.utils.helpers import current_month, half_up, js_string, parse_date, to_amount
from services.settings_service import SettingsService
from services import prompt_builder

logger = logging.getLogger("mealtrack.analytics")

Record = Dict[str, Any]

NUTRIENTS = ["calories", "protein", "carbs", "fats", "fiber"]
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
NEAR_BUDGET_PERCENT = 80

MEALS_CSV_HEADER = ["Date", "Type", "Name", "Status", "Cost", "Calories", "Protein", "Carbs", "Fats"]
SHOPPING_CSV_HEADER = ["Item", "Category", "Quantity", "Price", "Purchased"]
PANTRY_CSV_HEADER = ["Item", "Category", "Quantity", "Unit", "Expiry Date"]


def _meal_cost(meal: Record) -> float:
    return to_amount(meal.get("cost"))


def _sunday_index(day: date) -> int:
    # date.weekday() is Monday=0; the weekly views start on Sunday
    return (day.weekday() + 1) % 7


class AnalyticsService:
    # ------------------ Budget overview ------------------
    @staticmethod
    def budget_overview(
        meals: List[Record],
        monthly_budget: float,
        period: BudgetPeriod,
        selected: date,
    ) -> Dict[str, Any]:
        """
        Spending of planned meals against the budget of one window.

        The day budget is a thirtieth of the monthly budget and the week budget
        seven of those. Weeks run Sunday to Saturday around ``selected``.

        Returns:
            Dict with period, budget, total_spent, remaining, percent_used
            (capped at 100), is_over_budget, is_near_budget, meals_planned,
            avg_per_meal and a by_meal_type breakdown
        """
        period = BudgetPeriod(period)
        if period == BudgetPeriod.DAY:
            day_str = selected.isoformat()
            window = [m for m in meals if str(m.get("date") or "")[:10] == day_str]
            budget = monthly_budget / 30
        elif period == BudgetPeriod.WEEK:
            start = selected - timedelta(days=_sunday_index(selected))
            end = start + timedelta(days=6)
            window = [
                m for m in meals
                if parse_date(m.get("date")) and start <= parse_date(m.get("date")) <= end
            ]
            budget = monthly_budget / 30 * 7
        else:
            month = current_month(selected)
            window = [m for m in meals if str(m.get("date") or "").startswith(month)]
            budget = monthly_budget

        total = sum(_meal_cost(m) for m in window)
        remaining = budget - total
        percent = min(total / budget * 100, 100) if budget > 0 else 0
        over = remaining < 0
        return {
            "period": period.value,
            "budget": budget,
            "total_spent": total,
            "remaining": remaining,
            "percent_used": percent,
            "is_over_budget": over,
            "is_near_budget": percent >= NEAR_BUDGET_PERCENT and not over,
            "meals_planned": len(window),
            "avg_per_meal": half_up(total / len(window)) if window else 0,
            "by_meal_type": {
                t.value: sum(_meal_cost(m) for m in window if m.get("type") == t.value)
                for t in MealType
            },
        }

    @staticmethod
    def get_budget_overview(store: EntityStore, period: BudgetPeriod, selected: date) -> Dict[str, Any]:
        return AnalyticsService.budget_overview(
            MealRepository(store).list(),
            SettingsService.monthly_budget(store),
            period,
            selected,
        )

    # ------------------ Waste ------------------
    @staticmethod
    def waste_score(meals: List[Record], pantry: List[Record], today: date) -> float:
        """
        0-100 score; skipped meals cost up to 50 points and expired pantry
        items 5 points each, also capped at 50.
        """
        skipped = sum(1 for m in meals if m.get("status") == MealStatus.SKIPPED.value)
        expiry_dates = [parse_date(p.get("expiry_date")) for p in pantry]
        expired = sum(1 for d in expiry_dates if d is not None and d < today)
        meal_waste = skipped / (len(meals) or 1) * 50
        pantry_waste = min(expired * 5, 50)
        return max(0.0, min(100.0, 100 - (meal_waste + pantry_waste)))

    @staticmethod
    def waste_label(score: float) -> str:
        if score >= 80:
            return "Excellent"
        if score >= 60:
            return "Good"
        return "Needs work"

    # ------------------ Nutrition ------------------
    @staticmethod
    def nutrition_totals(meals: List[Record]) -> Dict[str, float]:
        """Sum of nutrition over meals that carry a ``nutrition`` object; ``count`` is how many"""
        totals: Dict[str, float] = {n: 0 for n in NUTRIENTS}
        totals["count"] = 0
        for meal in meals:
            nutrition = meal.get("nutrition")
            if not nutrition or not isinstance(nutrition, dict):
                continue
            for n in NUTRIENTS:
                totals[n] += to_amount(nutrition.get(n))
            totals["count"] += 1
        return totals

    @staticmethod
    def daily_nutrition(totals: Dict[str, float]) -> Dict[str, int]:
        # three meals make a day
        days = math.ceil(totals["count"] / 3) if totals["count"] > 0 else 1
        return {n: half_up(totals[n] / max(1, days)) for n in NUTRIENTS}

    @staticmethod
    def nutrition_progress(daily: Dict[str, int], goals: Dict[str, Any]) -> List[Dict[str, Any]]:
        progress = []
        for n in NUTRIENTS:
            goal = to_amount(goals.get(f"daily_{n}"))
            current = min(100.0, daily[n] / goal * 100) if goal > 0 else 0.0
            progress.append({"subject": n.capitalize(), "current": current, "full_mark": 100})
        return progress

    # ------------------ Spending ------------------
    @staticmethod
    def category_spending(items: List[Record]) -> List[Dict[str, Any]]:
        """Shopping spend per category, in first-seen category order"""
        spending: Dict[str, float] = {}
        for item in items:
            key = str(item.get("category") or "misc")
            spending[key] = spending.get(key, 0) + to_amount(item.get("price"))
        return [{"name": k, "value": v} for k, v in spending.items()]

    @staticmethod
    def weekly_spending(meals: List[Record]) -> List[Dict[str, Any]]:
        weeks = {f"Week {i}": 0.0 for i in range(1, 5)}
        for meal in meals:
            d = parse_date(meal.get("date"))
            if d is None:
                continue
            week = min(math.ceil(d.day / 7), 4)
            weeks[f"Week {week}"] += _meal_cost(meal)
        return [{"name": k, "amount": v} for k, v in weeks.items()]

    @staticmethod
    def cost_by_meal_type(meals: List[Record]) -> List[Dict[str, Any]]:
        """Average cost per slot; meals without a cost are left out of the average"""
        costs: Dict[str, List[float]] = {t.value: [] for t in MealType}
        for meal in meals:
            cost = _meal_cost(meal)
            if cost and meal.get("type") in costs:
                costs[meal["type"]].append(cost)
        return [
            {"type": t, "avg": half_up(sum(values) / len(values)) if values else 0}
            for t, values in costs.items()
        ]

    @staticmethod
    def day_of_week_spending(meals: List[Record]) -> List[Dict[str, Any]]:
        spending = [{"day": label, "amount": 0.0} for label in WEEKDAY_LABELS]
        for meal in meals:
            d = parse_date(meal.get("date"))
            if d is not None:
                spending[_sunday_index(d)]["amount"] += _meal_cost(meal)
        return spending

    # ------------------ Monthly report ------------------
    @staticmethod
    def monthly_report(store: EntityStore, month: Optional[str] = None,
                       today: Optional[date] = None) -> Dict[str, Any]:
        """
        Aggregate one month of meals, shopping and pantry data.

        Args:
            store: Entity store
            month: ``YYYY-MM`` (defaults to the month of ``today``)
            today: Reference date for expiry checks (defaults to today)

        Returns:
            Dict of totals, waste score, nutrition and spending breakdowns
        """
        today = today or date.today()
        month = month or current_month(today)

        meals = MealRepository(store).get_by_month(month)
        items = ShoppingItemRepository(store).get_by_month(month)
        pantry = PantryRepository(store).list()
        user_settings = SettingsService.get_settings(store)
        budget = to_amount(user_settings.get("monthly_budget"))

        total_spent = sum(to_amount(i.get("price")) for i in items)
        completed = sum(1 for m in meals if m.get("status") == MealStatus.DONE.value)
        score = AnalyticsService.waste_score(meals, pantry, today)
        totals = AnalyticsService.nutrition_totals(meals)
        daily = AnalyticsService.daily_nutrition(totals)

        logger.debug(f"Monthly report {month}: {len(meals)} meals, {len(items)} shopping items")
        return {
            "month": month,
            "budget": budget,
            "total_spent": total_spent,
            "total_meal_cost": sum(_meal_cost(m) for m in meals),
            "budget_saved": budget - total_spent,
            "meals_completed": completed,
            "total_meals": len(meals),
            "completion_rate": half_up(completed / len(meals) * 100) if meals else 0,
            "waste_score": score,
            "waste_label": AnalyticsService.waste_label(score),
            "nutrition_totals": totals,
            "daily_nutrition": daily,
            "nutrition_progress": AnalyticsService.nutrition_progress(daily, user_settings["nutrition_goals"]),
            "category_spending": AnalyticsService.category_spending(items),
            "weekly_spending": AnalyticsService.weekly_spending(meals),
            "cost_by_meal_type": AnalyticsService.cost_by_meal_type(meals),
            "day_of_week_spending": AnalyticsService.day_of_week_spending(meals),
        }

    @staticmethod
    async def generate_insights(store: EntityStore, integration, month: Optional[str] = None,
                                today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Ask the content-generation integration for insights on a monthly report"""
        report = await anyio.to_thread.run_sync(AnalyticsService.monthly_report, store, month, today)
        result = await integration.invoke_llm(prompt_builder.insights_prompt(report))
        insights = result.get("insights") or []
        logger.info(f"Generated {len(insights)} insights for {report['month']}")
        return insights

    # ------------------ Export ------------------
    @staticmethod
    def export_month_csv(store: EntityStore, month: str) -> str:
        """
        One month of meals and shopping plus the whole pantry, as CSV.

        Three sections (``MEALS REPORT``, ``SHOPPING LIST``, ``PANTRY INVENTORY``),
        each a title row and a header row, separated by two blank lines.
        Meals are listed newest first. Missing numbers render blank, except cost
        and price which render 0.
        """
        meals = sorted(
            MealRepository(store).get_by_month(month),
            key=lambda m: str(m.get("date") or ""),
            reverse=True,
        )
        items = ShoppingItemRepository(store).get_by_month(month)
        pantry = PantryRepository(store).list()

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")

        writer.writerow(["MEALS REPORT"])
        writer.writerow(MEALS_CSV_HEADER)
        for meal in meals:
            nutrition = meal.get("nutrition") if isinstance(meal.get("nutrition"), dict) else {}
            writer.writerow([
                js_string(meal.get("date")),
                js_string(meal.get("type")),
                js_string(meal.get("name")),
                js_string(meal.get("status")),
                js_string(meal.get("cost") or 0),
                *(js_string(nutrition.get(n) or None) for n in ("calories", "protein", "carbs", "fats")),
            ])

        writer.writerows([[], []])
        writer.writerow(["SHOPPING LIST"])
        writer.writerow(SHOPPING_CSV_HEADER)
        for item in items:
            writer.writerow([
                js_string(item.get("name")),
                js_string(item.get("category")),
                js_string(item.get("quantity")),
                js_string(item.get("price") or 0),
                js_string(bool(item.get("purchased"))),
            ])

        writer.writerows([[], []])
        writer.writerow(["PANTRY INVENTORY"])
        writer.writerow(PANTRY_CSV_HEADER)
        for item in pantry:
            writer.writerow([
                js_string(item.get("name")),
                js_string(item.get("category")),
                js_string(item.get("quantity") or None),
                js_string(item.get("unit") or None),
                js_string(item.get("expiry_date") or None),
            ])

        logger.info(f"Exported {month}: {len(meals)} meals, {len(items)} shopping items, {len(pantry)} pantry items")
        return buf.getvalue()
