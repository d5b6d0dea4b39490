"""Meal planner routes"""

from fastapi import APIRouter, Depends, Query, status
import logging
from typing import Any, Dict, List, Optional

from api.dependencies import get_entity_store, get_integration_service
from domain.schemas import EntityRecord, GeneratePlanRequest, MealSwapRequest
from repositories import EntityStore
from services.integration_service import IntegrationService
from services.planner_service import PlannerService

router = APIRouter(prefix="/planner", tags=["Planner"])
logger = logging.getLogger("mealtrack.api.planner")


@router.get("/meals", response_model=List[EntityRecord])
def list_meals(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    store: EntityStore = Depends(get_entity_store),
):
    return PlannerService.meals_for_month(store, month)


@router.post("/generate", response_model=List[EntityRecord], status_code=status.HTTP_201_CREATED)
async def generate_plan(
    payload: GeneratePlanRequest,
    store: EntityStore = Depends(get_entity_store),
    integration: IntegrationService = Depends(get_integration_service),
):
    """Generate and save breakfast, lunch and dinner for each day of the period"""
    return await PlannerService.generate_plan(
        store,
        integration,
        payload.start_date,
        payload.period,
        avoid_repeats=payload.avoid_repeats,
        budget_aware=payload.budget_aware,
    )


@router.post("/meals/{meal_id}/toggle", response_model=EntityRecord)
def toggle_meal(meal_id: str, store: EntityStore = Depends(get_entity_store)):
    """Mark a meal done, or back to pending if it already is"""
    return PlannerService.toggle_meal_status(store, meal_id)


@router.get("/meals/{meal_id}/recipe", response_model=Dict[str, Any])
async def get_recipe(
    meal_id: str,
    store: EntityStore = Depends(get_entity_store),
    integration: IntegrationService = Depends(get_integration_service),
):
    """Recipe of a meal, generated and saved on first request"""
    return await PlannerService.get_recipe(store, integration, meal_id)


@router.post("/meals/{meal_id}/recipe/shopping", response_model=List[EntityRecord])
async def add_recipe_to_shopping(
    meal_id: str,
    store: EntityStore = Depends(get_entity_store),
    integration: IntegrationService = Depends(get_integration_service),
):
    """Put the recipe ingredients missing from the pantry on the shopping list"""
    recipe = await PlannerService.get_recipe(store, integration, meal_id)
    return PlannerService.add_missing_to_shopping(store, recipe)


@router.get("/meals/{meal_id}/swaps", response_model=List[Dict[str, Any]])
async def get_swaps(
    meal_id: str,
    store: EntityStore = Depends(get_entity_store),
    integration: IntegrationService = Depends(get_integration_service),
):
    return await PlannerService.suggest_swaps(store, integration, meal_id)


@router.post("/meals/{meal_id}/swap", response_model=EntityRecord)
def apply_swap(meal_id: str, payload: MealSwapRequest, store: EntityStore = Depends(get_entity_store)):
    """Replace a meal with a chosen swap suggestion"""
    return PlannerService.apply_swap(store, meal_id, payload.model_dump())
