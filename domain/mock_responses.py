"""
Canned payloads and option pools of the mock content-generation responder.
"""

ANALYTICS_INSIGHTS = {
    "insights": [
        {"type": "success", "message": "Great job staying within budget so far!"},
        {"type": "tip", "message": "Try buying beans in bulk to save ~200 KES."},
        {"type": "warning", "message": "Dinner costs are 15% higher than average."},
        {"type": "saving", "message": "You saved 500 KES by cooking 5 days straight."},
    ]
}

SHOPPING_LIST = {
    "items": [
        {"name": "Maize Meal (2kg)", "category": "staples", "quantity": "1 packet", "price": 230},
        {"name": "Cooking Oil (1L)", "category": "staples", "quantity": "1 bottle", "price": 350},
        {"name": "Sukuma Wiki", "category": "vegetables", "quantity": "3 bunches", "price": 60},
        {"name": "Tomatoes", "category": "vegetables", "quantity": "1 kg", "price": 120},
        {"name": "Beef (500g)", "category": "proteins", "quantity": "500g", "price": 350},
        {"name": "Milk", "category": "dairy", "quantity": "2 liters", "price": 140},
        {"name": "Eggs", "category": "proteins", "quantity": "6", "price": 120},
    ]
}

RECIPE = {
    "ingredients": [
        {"name": "Maize Flour", "quantity": "2 cups", "in_pantry": True},
        {"name": "Water", "quantity": "3 cups", "in_pantry": True},
        {"name": "Sukuma Wiki", "quantity": "1 bunch", "in_pantry": False},
        {"name": "Onion", "quantity": "1 medium", "in_pantry": True},
        {"name": "Tomato", "quantity": "1 large", "in_pantry": True},
        {"name": "Oil", "quantity": "1 tbsp", "in_pantry": True},
    ],
    "instructions": [
        "Boil water in a sufuria.",
        "Stir in maize flour gradually until firm.",
        "Cover and cook for 5 minutes.",
        "In another pan, fry onions and tomatoes.",
        "Add chopped sukuma wiki and simmer for 5 minutes.",
        "Serve hot.",
    ],
    "prep_time": "10 mins",
    "cook_time": "20 mins",
    "servings": 2,
    "nutrition": {"calories": 450, "protein": 12, "carbs": 80, "fats": 8, "fiber": 15},
    "tips": [
        "Use leftover ugali for breakfast with tea.",
        "Add spinach for more vitamins.",
    ],
}

MEAL_SWAPS = {
    "suggestions": [
        {"name": "Githeri (Bean Stew)", "estimated_cost": 90, "pantry_usage_score": 80,
         "reason": "Uses beans from pantry and is cheaper."},
        {"name": "Chapati & Ndengu", "estimated_cost": 110, "pantry_usage_score": 60,
         "reason": "High protein and very filling."},
        {"name": "Rice & Cabbage", "estimated_cost": 70, "pantry_usage_score": 90,
         "reason": "Super budget friendly and quick."},
    ]
}

BREAKFAST_OPTIONS = [
    {"name": "Mandazi and Tea", "cost": 50, "prep_notes": "Fry mandazi or buy fresh"},
    {"name": "Oatmeal with Milk", "cost": 60, "prep_notes": "Cook with honey"},
    {"name": "Chapati and Eggs", "cost": 80, "prep_notes": "Scrambled or fried"},
    {"name": "Uji (Porridge)", "cost": 30, "prep_notes": "Add sugar and lemon"},
    {"name": "Toast and Avocado", "cost": 70, "prep_notes": "Fresh morning meal"},
    {"name": "Samosa and Tea", "cost": 55, "prep_notes": "Buy or make ahead"},
    {"name": "Mahamri and Chai", "cost": 45, "prep_notes": "Sweet coconut bread"},
    {"name": "Pancakes", "cost": 65, "prep_notes": "With honey or jam"},
    {"name": "Boiled Eggs and Bread", "cost": 50, "prep_notes": "Quick protein breakfast"},
    {"name": "Fruit Salad", "cost": 60, "prep_notes": "Seasonal fruits"},
]

LUNCH_OPTIONS = [
    {"name": "Rice and Beans", "cost": 120, "prep_notes": "Cook with onions and tomatoes"},
    {"name": "Pilau with Kachumbari", "cost": 150, "prep_notes": "Use pilau masala"},
    {"name": "Chapati and Ndengu", "cost": 100, "prep_notes": "Green grams stew"},
    {"name": "Githeri", "cost": 90, "prep_notes": "Maize and beans mix"},
    {"name": "Matoke and Beef", "cost": 180, "prep_notes": "Slow cook the matoke"},
    {"name": "Mukimo and Stew", "cost": 130, "prep_notes": "Mashed with greens"},
    {"name": "Biriani", "cost": 200, "prep_notes": "Special occasion meal"},
    {"name": "Fish and Ugali", "cost": 170, "prep_notes": "Fried tilapia"},
    {"name": "Spaghetti Bolognese", "cost": 140, "prep_notes": "With minced meat"},
    {"name": "Chicken Stew and Rice", "cost": 190, "prep_notes": "Sunday lunch style"},
]

DINNER_OPTIONS = [
    {"name": "Ugali and Sukuma Wiki", "cost": 80, "prep_notes": "Classic Kenyan dinner"},
    {"name": "Chapati and Beans", "cost": 110, "prep_notes": "Filling dinner"},
    {"name": "Rice and Cabbage", "cost": 70, "prep_notes": "Budget friendly"},
    {"name": "Ugali and Omena", "cost": 100, "prep_notes": "With silver fish"},
    {"name": "Mashed Potatoes and Greens", "cost": 90, "prep_notes": "Comfort food"},
    {"name": "Wali wa Nazi", "cost": 130, "prep_notes": "Coconut rice with fish"},
    {"name": "Ugali and Beef Stew", "cost": 150, "prep_notes": "Hearty dinner"},
    {"name": "Vegetable Curry and Rice", "cost": 100, "prep_notes": "Spiced vegetables"},
    {"name": "Mokimo", "cost": 85, "prep_notes": "With avocado"},
    {"name": "Sima and Kunde", "cost": 75, "prep_notes": "Cowpeas and ugali"},
]

MEAL_OPTION_POOLS = {
    "breakfast": BREAKFAST_OPTIONS,
    "lunch": LUNCH_OPTIONS,
    "dinner": DINNER_OPTIONS,
}

DEFAULT_PLAN_DAYS = 7

# Checked in order; the first phrase found in the prompt decides the day count.
PLAN_LENGTH_PHRASES = [
    ("14 days", 14),
    ("30 days", 30),
    ("entire month", 30),
    ("full month", 30),
    ("7 days", 7),
    ("week", 7),
]
