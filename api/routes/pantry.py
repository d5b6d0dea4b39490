"""Pantry management routes"""

from fastapi import APIRouter, Depends, Query
import logging
from typing import Dict, List, Optional

from api.dependencies import get_entity_store
from domain.schemas import EntityRecord
from repositories import EntityStore, PantryRepository
from services.pantry_service import PantryService

router = APIRouter(prefix="/pantry", tags=["Pantry"])
logger = logging.getLogger("mealtrack.api.pantry")


@router.get("/low-stock", response_model=List[EntityRecord])
def get_low_stock(store: EntityStore = Depends(get_entity_store)):
    """Pantry items at or below their low-stock threshold"""
    return PantryService.get_low_stock(store)


@router.get("/by-category", response_model=Dict[str, List[EntityRecord]])
def get_by_category(store: EntityStore = Depends(get_entity_store)):
    return PantryService.group_by_category(PantryRepository(store).list())


@router.post("/sync", response_model=List[EntityRecord])
def sync_with_shopping(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    store: EntityStore = Depends(get_entity_store),
):
    """
    Add every purchased shopping item of the month to the pantry.

    Same-name items (case-insensitive) are restocked, others created.
    Each call adds the purchases again.
    """
    return PantryService.sync_with_shopping(store, month)
