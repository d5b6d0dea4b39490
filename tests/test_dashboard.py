"""
Tests for the home dashboard.

This test suite covers:
- Which slot is up next at a given hour
- Today's schedule with the configured meal times
- Completed meals and today's cost
- Recorded spending of the month against the budget
"""

from datetime import datetime

import pytest

from core.utils.helpers import format_clock_time
from domain.enums import MealType
from services.dashboard_service import DashboardService
from services.settings_service import SettingsService
from test_fixtures import THIS_MONTH, empty_store, make_meal, make_shopping_item, store

MORNING = datetime(2026, 3, 18, 8, 30)


def add_spending(store, *amounts, month=THIS_MONTH):
    store.bulk_create("SpendingRecord", [{"amount": a, "month": month} for a in amounts])


@pytest.mark.parametrize(
    "hour,expected",
    [
        (0, MealType.BREAKFAST),
        (9, MealType.BREAKFAST),
        (10, MealType.LUNCH),
        (14, MealType.LUNCH),
        (15, MealType.DINNER),
        (23, MealType.DINNER),
    ],
)
def test_next_meal_type_by_hour(hour, expected):
    assert DashboardService.next_meal_type(hour) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("07:00", "7:00 AM"),
        ("12:30", "12:30 PM"),
        ("20:00", "8:00 PM"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_clock_time(value, expected):
    assert format_clock_time(value) == expected


# =============================================================================
# TODAY
# =============================================================================


def test_schedule_uses_configured_times(store):
    summary = DashboardService.summary(store, MORNING)
    assert [(s["type"], s["time"]) for s in summary["schedule"]] == [
        ("breakfast", "7:00 AM"),
        ("lunch", "1:00 PM"),
        ("dinner", "8:00 PM"),
    ]
    assert summary["date"] == "2026-03-18"
    assert summary["month"] == THIS_MONTH


def test_schedule_falls_back_to_default_times(empty_store):
    summary = DashboardService.summary(empty_store, MORNING)
    assert summary["next_meal"] == {"type": "breakfast", "time": "7:00 AM", "meal": None}


def test_empty_slots_are_pending(store):
    summary = DashboardService.summary(store, MORNING)
    assert all(s["meal"] is None and s["status"] == "pending" for s in summary["schedule"])
    assert summary["meals_completed"] == 0
    assert summary["today_cost"] == 0


def test_today_meals_cost_and_completion(store):
    store.bulk_create("Meal", [
        make_meal("2026-03-18", "breakfast", 60, status="done"),
        make_meal("2026-03-18", "lunch", 120, status="done"),
        make_meal("2026-03-18", "dinner", None),
        make_meal("2026-03-17", "dinner", 500, status="done"),
    ])
    summary = DashboardService.summary(store, MORNING)
    assert summary["meals_completed"] == 2
    assert summary["today_cost"] == 180
    assert [s["status"] for s in summary["schedule"]] == ["done", "done", "pending"]


def test_next_meal_carries_the_planned_record(store):
    store.create("Meal", make_meal("2026-03-18", "lunch", 120, name="Githeri", prep_notes="Soak beans"))
    summary = DashboardService.summary(store, datetime(2026, 3, 18, 12, 0))
    assert summary["next_meal"]["type"] == "lunch"
    assert summary["next_meal"]["time"] == "1:00 PM"
    assert summary["next_meal"]["meal"]["name"] == "Githeri"
    assert [s["is_next"] for s in summary["schedule"]] == [False, True, False]


def test_finished_next_meal_is_not_highlighted(store):
    store.create("Meal", make_meal("2026-03-18", "dinner", 140, status="done"))
    summary = DashboardService.summary(store, datetime(2026, 3, 18, 19, 0))
    assert summary["next_meal"]["type"] == "dinner"
    assert not any(s["is_next"] for s in summary["schedule"])


# =============================================================================
# BUDGET
# =============================================================================


def test_month_spending_sums_recorded_amounts(store):
    add_spending(store, 1200, "300", None)
    add_spending(store, 999, month="2026-02")
    summary = DashboardService.summary(store, MORNING)
    assert summary["month_spent"] == 1500
    assert summary["monthly_budget"] == 6000
    assert summary["budget_remaining"] == 4500
    assert summary["is_budget_low"] is False


def test_shopping_prices_do_not_count_as_spending(store):
    summary = DashboardService.summary(store, MORNING)
    assert summary["month_spent"] == 0
    assert summary["budget_remaining"] == 6000


@pytest.mark.parametrize(
    "spent,low",
    [
        (5000, False),  # exactly 1000 left
        (5001, True),
        (5999, True),
        (6000, False),  # nothing left
        (6500, False),  # overspent
    ],
)
def test_low_budget_boundary(store, spent, low):
    add_spending(store, spent)
    assert DashboardService.summary(store, MORNING)["is_budget_low"] is low


def test_budget_follows_settings(store):
    SettingsService.update_settings(store, {"monthly_budget": 2000})
    add_spending(store, 1500)
    summary = DashboardService.summary(store, MORNING)
    assert summary["budget_remaining"] == 500
    assert summary["is_budget_low"] is True


def test_low_stock_shopping_items_are_counted(store):
    store.bulk_create("ShoppingItem", [
        make_shopping_item("Sugar", low_stock=True),
        make_shopping_item("Tea leaves", low_stock=True),
    ])
    assert DashboardService.summary(store, MORNING)["low_stock_count"] == 2
