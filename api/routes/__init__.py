"""API routes package"""

from . import entities, auth, admin, integrations, analytics, dashboard, settings, pantry, shopping, planner, health

__all__ = [
    "entities",
    "auth",
    "admin",
    "integrations",
    "analytics",
    "dashboard",
    "settings",
    "pantry",
    "shopping",
    "planner",
    "health",
]
