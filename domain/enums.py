"""
Domain enums for MealTrack application.
Contains all enumeration types used across the domain models.
"""

import enum


class EntityName(str, enum.Enum):
    """Names of the persisted collections, also their storage keys"""

    MEAL = "Meal"
    PANTRY_ITEM = "PantryItem"
    SHOPPING_ITEM = "ShoppingItem"
    SPENDING_RECORD = "SpendingRecord"
    USER_SETTINGS = "UserSettings"
    USERS = "Users"
    AUDIT_LOG = "AuditLog"


# Key of the serialized session, next to the collections in the same namespace
SESSION_STORAGE_KEY = "auth_session"


class MealType(str, enum.Enum):
    """Meal slots of a planned day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class MealStatus(str, enum.Enum):
    """Lifecycle of a planned meal"""

    PENDING = "pending"
    DONE = "done"
    SKIPPED = "skipped"


class UserRole(str, enum.Enum):
    """Account roles"""

    USER = "USER"
    ADMIN = "ADMIN"


class AuditAction(str, enum.Enum):
    """Actions recorded in the audit log"""

    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    LOGIN_BLOCKED = "LOGIN_BLOCKED"
    LOGOUT = "LOGOUT"
    USER_CREATED = "USER_CREATED"
    USER_ACTIVATED = "USER_ACTIVATED"
    USER_DEACTIVATED = "USER_DEACTIVATED"
    PASSWORD_RESET_REQUESTED = "PASSWORD_RESET_REQUESTED"
    PASSWORD_RESET_COMPLETED = "PASSWORD_RESET_COMPLETED"
    PASSWORD_RESET_BY_ADMIN = "PASSWORD_RESET_BY_ADMIN"


class BudgetPeriod(str, enum.Enum):
    """Windows of the planner budget overview"""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class AlertType(str, enum.Enum):
    """Kinds of dashboard alerts"""

    EXPIRY = "expiry"
    LOW_STOCK = "low_stock"
    OVER_BUDGET = "over_budget"
    BUDGET = "budget"
    PREP = "prep"
