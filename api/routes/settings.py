"""Household settings routes"""

from fastapi import APIRouter, Depends
import logging
from typing import Any, Dict

from api.dependencies import get_entity_store
from domain.schemas import SettingsUpdate
from repositories import EntityStore
from services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["Settings"])
logger = logging.getLogger("mealtrack.api.settings")


@router.get("", response_model=Dict[str, Any])
def get_settings(store: EntityStore = Depends(get_entity_store)):
    """Settings with defaults for anything not set"""
    return SettingsService.get_settings(store)


@router.put("", response_model=Dict[str, Any])
def update_settings(payload: SettingsUpdate, store: EntityStore = Depends(get_entity_store)):
    """Update only the fields sent"""
    SettingsService.update_settings(store, payload.model_dump(exclude_unset=True))
    return SettingsService.get_settings(store)
