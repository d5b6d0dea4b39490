"""
Prompt texts sent to the content-generation integration.

The phrases the mock responder routes on ("Generate a shopping list",
"detailed recipe", ...) must stay in these texts.
"""

import json
from typing import Any, Dict, Iterable, List

from app.config import settings


def pantry_summary(pantry_items: Iterable[Dict[str, Any]]) -> str:
    return ", ".join(
        f"{p.get('name')} ({p.get('quantity')} {p.get('unit') or ''})" for p in pantry_items
    )


def meal_plan_prompt(period_text: str, num_days: int, preference: str, budget: float,
                     avoid_repeats: bool = True, budget_aware: bool = True) -> str:
    cur = settings.currency
    lines = [
        f"Generate {period_text} of meal suggestions for a {preference} food preference.",
        f"Include breakfast, lunch, and dinner for {num_days} days.",
        f"Each meal should have: name (simple, budget-friendly), cost in {cur} and optional prep_notes.",
        f"Monthly budget is {cur} {budget:.0f}.",
    ]
    if avoid_repeats:
        lines.append("Avoid repeating the same meals.")
    if budget_aware:
        lines.append(f"Stay within the monthly budget of {cur} {budget:.0f}.")
    return "\n".join(lines)


def shopping_list_prompt(meal_names: List[str], pantry_items: Iterable[Dict[str, Any]]) -> str:
    return "\n".join([
        f"Based on these planned meals: {', '.join(meal_names)}",
        f"Current pantry inventory: {pantry_summary(pantry_items) or 'Empty pantry'}",
        "Generate a shopping list with ingredients needed. ONLY include items that are NOT "
        "already in the pantry or if pantry quantity is insufficient.",
        "Each item should have: name, category (one of: staples, proteins, vegetables, fruits, "
        f"dairy, misc), quantity (with unit), price (number in {settings.currency}).",
    ])


def recipe_prompt(meal: Dict[str, Any], preference: str, goals: List[str],
                  pantry_items: Iterable[Dict[str, Any]]) -> str:
    goals_list = ", ".join(goals)
    return "\n".join([
        f'Generate a detailed recipe for "{meal.get("name")}" - a {preference} meal.',
        f"Budget target: {settings.currency} {meal.get('cost') or 150}",
        f"Available pantry items: {pantry_summary(pantry_items) or 'None'}",
        f"Dietary goals: {goals_list}",
        "Provide ingredients (mark which are in the pantry), instructions, prep and cook time, "
        "servings, nutrition per serving and tips.",
    ])


def meal_swap_prompt(meal: Dict[str, Any], preference: str, goals: List[str],
                     pantry_items: Iterable[Dict[str, Any]]) -> str:
    return "\n".join([
        f'Current meal: "{meal.get("name")}" - Cost: {settings.currency} {meal.get("cost") or 0}',
        f"Available pantry: {pantry_summary(pantry_items) or 'Limited'}",
        f"Dietary goals: {', '.join(goals)}",
        f"Food preference: {preference}",
        "Suggest 2-3 alternative meals that are cheaper or the same cost, use more pantry "
        f"ingredients and are the same meal type ({meal.get('type')}).",
        "For each suggestion provide: name, estimated_cost, pantry_usage_score (0-100), reason",
    ])


def insights_prompt(report: Dict[str, Any]) -> str:
    cur = settings.currency
    return "\n".join([
        "Analyze this meal planning data and provide 3-4 helpful insights:",
        f"- Total spent: {cur} {report['total_spent']}",
        f"- Budget: {cur} {report['budget']}",
        f"- Meals completed: {report['meals_completed']}/{report['total_meals']}",
        f"- Category spending: {json.dumps(report['category_spending'])}",
        f"- Day of week spending: {json.dumps(report['day_of_week_spending'])}",
        f"- Cost per meal type: {json.dumps(report['cost_by_meal_type'])}",
        "Keep each insight under 20 words. Be specific with numbers.",
    ])
