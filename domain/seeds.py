"""
Demo seed data written the first time a collection is accessed.

Seeds are built on demand so that date-stamped records (shopping month,
pantry ``last_updated``) reflect the day they are materialized.
"""

from datetime import date
from typing import Callable, Dict, List

from core.utils.helpers import simple_hash
from domain.enums import EntityName, UserRole

Record = dict


def user_settings_seed(today: date) -> List[Record]:
    return [
        {
            "id": "settings-1",
            "breakfast_time": "07:00",
            "lunch_time": "13:00",
            "dinner_time": "20:00",
            "monthly_budget": 6000,
            "food_preference": "kenyan",
            "household_size": 2,
        }
    ]


def shopping_item_seed(today: date) -> List[Record]:
    month = today.strftime("%Y-%m")
    rows = [
        ("shop-1", "Maize Meal (2kg)", "staples", "2 packets", 230, True),
        ("shop-2", "Cooking Oil (1L)", "staples", "1 bottle", 350, True),
        ("shop-3", "Sukuma Wiki", "vegetables", "3 bunches", 60, True),
        ("shop-4", "Tomatoes", "vegetables", "1 kg", 120, False),
        ("shop-5", "Beef (500g)", "proteins", "500g", 350, True),
        ("shop-6", "Milk", "dairy", "2 liters", 140, False),
        ("shop-7", "Eggs", "proteins", "6", 120, True),
    ]
    return [
        {
            "id": item_id,
            "name": name,
            "category": category,
            "quantity": quantity,
            "price": price,
            "purchased": purchased,
            "month": month,
        }
        for item_id, name, category, quantity, price, purchased in rows
    ]


def pantry_item_seed(today: date) -> List[Record]:
    stamp = today.isoformat()
    return [
        {"id": "pantry-1", "name": "Rice", "category": "staples", "quantity": "3", "unit": "kg",
         "last_updated": stamp, "low_stock_threshold": "1"},
        {"id": "pantry-2", "name": "Salt", "category": "spices", "quantity": "500", "unit": "g",
         "last_updated": stamp},
        {"id": "pantry-3", "name": "Onions", "category": "vegetables", "quantity": "5", "unit": "pcs",
         "last_updated": stamp, "low_stock_threshold": "2"},
    ]


def meal_seed(today: date) -> List[Record]:
    return []


def users_seed(today: date) -> List[Record]:
    # Demo accounts; the digests use the insecure demo hash.
    return [
        {
            "id": "admin-1",
            "email": "gee.mwerevu@gmail.com",
            "username": "superadmin",
            "password_hash": simple_hash("passcode123!"),
            "role": UserRole.ADMIN.value,
            "is_active": True,
            "email_verified": True,
            "created_at": "2024-01-01T00:00:00Z",
            "last_login_at": None,
        },
        {
            "id": "user-demo",
            "email": "demo@mealtrack.pro",
            "username": None,
            "password_hash": simple_hash("demo123!"),
            "role": UserRole.USER.value,
            "is_active": True,
            "email_verified": True,
            "created_at": "2024-06-01T00:00:00Z",
            "last_login_at": None,
        },
    ]


SeedFactory = Callable[[date], List[Record]]

DEFAULT_SEEDS: Dict[str, SeedFactory] = {
    EntityName.USER_SETTINGS.value: user_settings_seed,
    EntityName.MEAL.value: meal_seed,
    EntityName.SHOPPING_ITEM.value: shopping_item_seed,
    EntityName.PANTRY_ITEM.value: pantry_item_seed,
    EntityName.USERS.value: users_seed,
}
