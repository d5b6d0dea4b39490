"""Shopping list routes"""

from fastapi import APIRouter, Depends, Query, status
import logging
from typing import Any, Dict, List, Optional

from api.dependencies import get_entity_store, get_integration_service
from domain.schemas import (
    EntityRecord,
    GenerateShoppingRequest,
    PurchaseRequest,
    ShoppingItemCreate,
)
from repositories import EntityStore
from services.integration_service import IntegrationService
from services.shopping_service import ShoppingService

router = APIRouter(prefix="/shopping", tags=["Shopping"])
logger = logging.getLogger("mealtrack.api.shopping")

MONTH_PATTERN = r"^\d{4}-\d{2}$"


@router.get("", response_model=List[EntityRecord])
def list_items(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    store: EntityStore = Depends(get_entity_store),
):
    """Shopping items of a month (defaults to this month)"""
    return ShoppingService.list_for_month(store, month)


@router.post("", response_model=EntityRecord, status_code=status.HTTP_201_CREATED)
def add_item(payload: ShoppingItemCreate, store: EntityStore = Depends(get_entity_store)):
    return ShoppingService.add_item(store, payload.model_dump())


@router.get("/summary", response_model=Dict[str, Any])
def get_summary(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    store: EntityStore = Depends(get_entity_store),
):
    return ShoppingService.summary(store, month)


@router.post("/generate", response_model=List[EntityRecord], status_code=status.HTTP_201_CREATED)
async def generate_list(
    payload: Optional[GenerateShoppingRequest] = None,
    store: EntityStore = Depends(get_entity_store),
    integration: IntegrationService = Depends(get_integration_service),
):
    """
    Generate shopping items from the month's planned meals.

    Answers 400 when no meals are planned.
    """
    month = payload.month if payload else None
    return await ShoppingService.generate_from_meals(store, integration, month)


@router.post("/{item_id}/purchase", response_model=Dict[str, Any])
def mark_purchased(
    item_id: str,
    payload: Optional[PurchaseRequest] = None,
    store: EntityStore = Depends(get_entity_store),
):
    """Mark an item purchased (default) or not; purchases are added to the pantry"""
    purchased = payload.purchased if payload else True
    return ShoppingService.set_purchased(store, item_id, purchased)
