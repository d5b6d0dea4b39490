"""
Tests for the dashboard alerts.
"""

from datetime import date

import pytest

from services.alerts_service import AlertsService
from services.settings_service import SettingsService
from test_fixtures import (
    TODAY,
    make_meal,
    make_pantry_item,
    make_shopping_item,
    store,
)


def messages(alerts):
    return [a["message"] for a in alerts]


# =============================================================================
# EXPIRY
# =============================================================================


def test_expiry_alerts_within_window():
    pantry = [
        make_pantry_item("Milk", expiry_date="2026-03-18"),
        make_pantry_item("Bread", expiry_date="2026-03-19"),
        make_pantry_item("Cheese", expiry_date="2026-03-21"),
        make_pantry_item("Yogurt", expiry_date="2026-03-22"),
        make_pantry_item("Rice"),
    ]
    alerts = AlertsService.expiry_alerts(pantry, TODAY, 3)

    assert messages(alerts) == [
        "Milk expires in 0 days",
        "Bread expires in 1 day",
        "Cheese expires in 3 days",
    ]
    assert [a["priority"] for a in alerts] == [3, 2, 2]
    assert all(a["type"] == "expiry" and a["link"] == "Pantry" for a in alerts)


def test_expired_items_get_top_priority():
    alerts = AlertsService.expiry_alerts([make_pantry_item("Old Milk", expiry_date="2026-03-10")], TODAY, 3)
    assert alerts == [{"type": "expiry", "message": "Old Milk has expired", "link": "Pantry", "priority": 3}]


def test_expiry_window_uses_calendar_days():
    # a timestamp late in the day still counts by its date
    pantry = [make_pantry_item("Fish", expiry_date="2026-03-19T23:30:00Z")]
    assert messages(AlertsService.expiry_alerts(pantry, TODAY, 1)) == ["Fish expires in 1 day"]


def test_malformed_expiry_date_is_ignored():
    assert AlertsService.expiry_alerts([make_pantry_item("X", expiry_date="soon")], TODAY, 3) == []


# =============================================================================
# LOW STOCK
# =============================================================================


def test_low_stock_alerts():
    pantry = [
        make_pantry_item("Rice", quantity="3", low_stock_threshold="1"),
        make_pantry_item("Onions", quantity="2", unit="pcs", low_stock_threshold="2"),
        make_pantry_item("Flour", quantity="0.5", low_stock_threshold="1"),
        make_pantry_item("Salt", quantity="100"),
    ]
    alerts = AlertsService.low_stock_alerts(pantry)
    assert messages(alerts) == [
        "Onions is running low (2 pcs left)",
        "Flour is running low (0.5 kg left)",
    ]
    assert {a["priority"] for a in alerts} == {1}


# =============================================================================
# BUDGET
# =============================================================================


def test_over_budget_alert():
    shopping = [make_shopping_item(price=4000), make_shopping_item(price=2100)]
    alerts = AlertsService.budget_alerts(shopping, 6000, {})
    assert alerts == [{
        "type": "over_budget",
        "message": "You're KES 100 over budget this month",
        "link": "Shopping",
        "priority": 3,
    }]


def test_near_budget_alert():
    alerts = AlertsService.budget_alerts([make_shopping_item(price=5500)], 6000, {})
    assert messages(alerts) == ["You've used 92% of your monthly budget"]
    assert alerts[0]["type"] == "budget"
    assert alerts[0]["priority"] == 2


def test_spending_exactly_the_budget_is_a_warning_not_over():
    alerts = AlertsService.budget_alerts([make_shopping_item(price=6000)], 6000, {})
    assert [a["type"] for a in alerts] == ["budget"]


def test_category_allocation_alert():
    shopping = [
        make_shopping_item("Beef", price=350, category="proteins"),
        make_shopping_item("Eggs", price=120, category="proteins"),
        make_shopping_item("Milk", price=140, category="dairy"),
    ]
    alerts = AlertsService.budget_alerts(shopping, 6000, {"proteins": 500, "dairy": 500})
    assert messages(alerts) == ["proteins category nearing limit: KES 470/500"]
    assert alerts[0]["priority"] == 1


# =============================================================================
# MEAL PREP
# =============================================================================


def test_prep_alerts_only_for_tomorrow_with_notes():
    meals = [
        make_meal("2026-03-19", "dinner", prep_notes="Soak beans overnight"),
        make_meal("2026-03-19", "lunch", prep_notes=""),
        make_meal("2026-03-20", "dinner", prep_notes="Marinate the beef"),
    ]
    alerts = AlertsService.prep_alerts(meals, TODAY)
    assert messages(alerts) == ["Prep for tomorrow's dinner: Soak beans overnight"]
    assert alerts[0]["link"] == "Planner"


# =============================================================================
# ASSEMBLY
# =============================================================================


@pytest.fixture
def alert_inputs():
    pantry = [
        make_pantry_item("Onions", quantity="1", low_stock_threshold="2"),
        make_pantry_item("Milk", expiry_date="2026-03-19"),
        make_pantry_item("Old Bread", expiry_date="2026-03-01"),
    ]
    shopping = [make_shopping_item(price=5600)]
    meals = [make_meal("2026-03-19", "breakfast", prep_notes="Soak oats")]
    return pantry, shopping, meals


def test_build_alerts_sorted_by_priority(alert_inputs):
    pantry, shopping, meals = alert_inputs
    alerts = AlertsService.build_alerts(pantry, shopping, meals, {"monthly_budget": 6000}, TODAY)

    assert [a["priority"] for a in alerts] == [3, 2, 2, 1, 1]
    assert messages(alerts) == [
        "Old Bread has expired",
        "Milk expires in 1 day",
        "You've used 93% of your monthly budget",
        "Onions is running low (1 kg left)",
        "Prep for tomorrow's breakfast: Soak oats",
    ]


def test_only_explicit_false_disables_a_category(alert_inputs):
    pantry, shopping, meals = alert_inputs
    prefs = {
        "expiry_alerts": False,
        "low_stock_alerts": None,
        "budget_alerts": False,
        "meal_prep_reminders": False,
    }
    alerts = AlertsService.build_alerts(
        pantry, shopping, meals, {"monthly_budget": 6000, "alert_preferences": prefs}, TODAY
    )
    assert [a["type"] for a in alerts] == ["low_stock"]


def test_expiry_days_before_preference():
    pantry = [make_pantry_item("Cheese", expiry_date="2026-03-23")]
    user_settings = {"monthly_budget": 6000, "alert_preferences": {"expiry_days_before": 5}}
    alerts = AlertsService.build_alerts(pantry, [], [], user_settings, TODAY)
    assert messages(alerts) == ["Cheese expires in 5 days"]


def test_get_alerts_on_seed_data(store):
    assert AlertsService.get_alerts(store, TODAY) == []


def test_get_alerts_reads_upcoming_meals_and_settings(store):
    store.bulk_create("Meal", [
        make_meal("2026-03-19", "dinner", prep_notes="Thaw the fish"),
        make_meal("2026-03-17", "dinner", prep_notes="Already past"),
    ])
    SettingsService.update_settings(store, {"monthly_budget": 1400})

    alerts = AlertsService.get_alerts(store, TODAY)
    assert messages(alerts) == [
        "You've used 98% of your monthly budget",
        "Prep for tomorrow's dinner: Thaw the fish",
    ]


def test_get_alerts_only_counts_this_months_shopping(store):
    store.create("ShoppingItem", make_shopping_item(price=9000, month="2026-02"))
    assert AlertsService.get_alerts(store, date(2026, 3, 18)) == []
