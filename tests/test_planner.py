"""
Tests for meal planning.

This test suite covers:
- Plan periods and the generation prompt
- Turning a generated plan into dated meals
- Meal status toggling
- Recipes (generated once, then read back) and their missing ingredients
- Meal swap suggestions
"""

import json
from datetime import date

import anyio
import pytest

from app.exceptions import NotFoundError, ServiceValidationError
from domain import mock_responses
from services.planner_service import PlannerService, plan_length
from test_fixtures import (
    THIS_MONTH,
    TODAY,
    empty_store,
    make_integration,
    make_meal,
    store,
)


# =============================================================================
# PLAN PERIODS AND PROMPT
# =============================================================================


@pytest.mark.parametrize(
    "period,anchor,expected",
    [
        ("week", TODAY, (7, "week")),
        ("14", TODAY, (14, "14 days")),
        ("month", date(2026, 2, 10), (28, "entire month")),
        ("month", date(2028, 2, 10), (29, "entire month")),
        ("month", TODAY, (31, "entire month")),
    ],
)
def test_plan_length(period, anchor, expected):
    assert plan_length(period, anchor) == expected


def test_unknown_plan_period():
    with pytest.raises(ServiceValidationError):
        plan_length("fortnight", TODAY)


def test_plan_prompt_mentions_period_and_budget():
    prompt = PlannerService.build_plan_prompt(
        {"food_preference": "kenyan", "monthly_budget": 6000}, "14", TODAY
    )
    assert "Generate 14 days of meal suggestions" in prompt
    assert "kenyan" in prompt
    assert "6000" in prompt


# =============================================================================
# PLAN TO MEALS
# =============================================================================


def test_plan_to_meals_dates_each_day_from_start():
    plan = {
        "days": [
            {
                "breakfast": {"name": "Uji", "cost": 30, "prep_notes": "Add lemon"},
                "lunch": {"name": "Githeri", "cost": 90},
                "dinner": {"name": "Ugali", "cost": 80, "prep_notes": None},
            },
            {"dinner": {"name": "Pilau", "cost": 150}},
        ]
    }
    meals = PlannerService.plan_to_meals(plan, date(2026, 3, 31))

    assert [(m["date"], m["type"]) for m in meals] == [
        ("2026-03-31", "breakfast"),
        ("2026-03-31", "lunch"),
        ("2026-03-31", "dinner"),
        ("2026-04-01", "dinner"),
    ]
    assert {m["status"] for m in meals} == {"pending"}
    assert [m["prep_notes"] for m in meals] == ["Add lemon", "", "", ""]


def test_plan_to_meals_empty_plan():
    assert PlannerService.plan_to_meals({}, TODAY) == []
    assert PlannerService.plan_to_meals({"days": ["garbage"]}, TODAY) == []


def test_generate_week_plan(empty_store):
    created = anyio.run(PlannerService.generate_plan, empty_store, make_integration(), TODAY, "week")

    assert len(created) == 21
    assert created[0]["date"] == "2026-03-18"
    assert created[-1]["date"] == "2026-03-24"
    assert all(m["id"] for m in created)
    assert len(empty_store.list("Meal")) == 21


def test_generate_month_plan_spans_the_month(empty_store):
    created = anyio.run(PlannerService.generate_plan, empty_store, make_integration(), date(2026, 4, 1), "month")
    # April: 30 days of three meals
    assert len(created) == 90
    assert created[-1]["date"] == "2026-04-30"


def test_generate_plan_rejects_unknown_period(empty_store):
    with pytest.raises(ServiceValidationError):
        anyio.run(PlannerService.generate_plan, empty_store, make_integration(), TODAY, "year")
    assert empty_store.list("Meal") == []


# =============================================================================
# STATUS
# =============================================================================


@pytest.mark.parametrize(
    "status,expected",
    [("pending", "done"), ("done", "pending"), ("skipped", "done")],
)
def test_toggle_meal_status(empty_store, status, expected):
    meal = empty_store.create("Meal", make_meal("2026-03-18", status=status))
    assert PlannerService.toggle_meal_status(empty_store, meal["id"])["status"] == expected


def test_toggle_missing_meal(empty_store):
    with pytest.raises(NotFoundError):
        PlannerService.toggle_meal_status(empty_store, "missing")


def test_meals_for_month(empty_store):
    empty_store.bulk_create("Meal", [make_meal("2026-03-01"), make_meal("2026-04-01")])
    assert len(PlannerService.meals_for_month(empty_store, THIS_MONTH)) == 1


# =============================================================================
# RECIPES
# =============================================================================


def test_recipe_generated_and_saved_on_meal(store):
    meal = store.create("Meal", make_meal("2026-03-18", name="Ugali and Sukuma Wiki"))

    recipe = anyio.run(PlannerService.get_recipe, store, make_integration(), meal["id"])

    assert recipe == mock_responses.RECIPE
    saved = store.filter("Meal", {"id": meal["id"]})[0]
    assert json.loads(saved["recipe"]) == recipe
    assert saved["nutrition"] == recipe["nutrition"]


def test_saved_recipe_is_read_back(empty_store):
    stored = {"ingredients": [], "steps": ["Boil water"], "nutrition": {"calories": 1}}
    meal = empty_store.create("Meal", make_meal("2026-03-18", recipe=json.dumps(stored)))

    class NoCalls:
        async def invoke_llm(self, prompt, response_schema=None):
            raise AssertionError("integration should not be called")

    assert anyio.run(PlannerService.get_recipe, empty_store, NoCalls(), meal["id"]) == stored


def test_recipe_for_missing_meal(empty_store):
    with pytest.raises(NotFoundError):
        anyio.run(PlannerService.get_recipe, empty_store, make_integration(), "missing")


def test_add_missing_ingredients_to_shopping(empty_store):
    created = PlannerService.add_missing_to_shopping(empty_store, mock_responses.RECIPE, TODAY)

    missing = [i["name"] for i in mock_responses.RECIPE["ingredients"] if not i["in_pantry"]]
    assert [c["name"] for c in created] == missing
    assert all(
        c["category"] == "misc" and c["price"] == 0 and c["purchased"] is False and c["month"] == THIS_MONTH
        for c in created
    )


def test_nothing_missing_adds_nothing(empty_store):
    recipe = {"ingredients": [{"name": "Water", "quantity": "1 cup", "in_pantry": True}]}
    assert PlannerService.add_missing_to_shopping(empty_store, recipe, TODAY) == []
    assert empty_store.list("ShoppingItem") == []


# =============================================================================
# SWAPS
# =============================================================================


def test_suggest_swaps(store):
    meal = store.create("Meal", make_meal("2026-03-18", name="Pilau", cost=150))
    suggestions = anyio.run(PlannerService.suggest_swaps, store, make_integration(), meal["id"])
    assert suggestions == mock_responses.MEAL_SWAPS["suggestions"]


def test_apply_swap_replaces_name_and_cost_only(empty_store):
    meal = empty_store.create("Meal", make_meal("2026-03-18", name="Pilau", cost=150, prep_notes="Use masala"))
    updated = PlannerService.apply_swap(
        empty_store, meal["id"], {"name": "Githeri (Bean Stew)", "estimated_cost": 90, "reason": "cheaper"}
    )
    assert updated["name"] == "Githeri (Bean Stew)"
    assert updated["cost"] == 90
    assert updated["prep_notes"] == "Use masala"
    assert "reason" not in updated


def test_apply_swap_to_missing_meal(empty_store):
    with pytest.raises(NotFoundError):
        PlannerService.apply_swap(empty_store, "missing", {"name": "x", "estimated_cost": 1})
