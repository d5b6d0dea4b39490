"""
Repositories package - Data access layer.
"""

from repositories.entity_repository import (
    EntityStore,
    EntityClient,
    Record,
    encode_collection,
    decode_collection,
)
from repositories.base import BaseRepository
from repositories.meal_repository import MealRepository
from repositories.pantry_repository import PantryRepository
from repositories.shopping_repository import (
    ShoppingItemRepository,
)
from repositories.spending_repository import SpendingRecordRepository
from repositories.settings_repository import SettingsRepository
from repositories.user_repository import UserRepository, AuditLogRepository

__all__ = [
    "EntityStore",
    "EntityClient",
    "Record",
    "encode_collection",
    "decode_collection",
    "BaseRepository",
    "MealRepository",
    "PantryRepository",
    "ShoppingItemRepository",
    "SpendingRecordRepository",
    "SettingsRepository",
    "UserRepository",
    "AuditLogRepository",
]
