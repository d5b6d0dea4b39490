"""Home dashboard route"""

from fastapi import APIRouter, Depends, Query
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from api.dependencies import get_entity_store
from repositories import EntityStore
from services.dashboard_service import DashboardService

router = APIRouter(tags=["Dashboard"])
logger = logging.getLogger("mealtrack.api.dashboard")


@router.get("/dashboard", response_model=Dict[str, Any])
def dashboard(
    at: Optional[datetime] = Query(None, description="Local time to build the view for, defaults to now"),
    store: EntityStore = Depends(get_entity_store),
):
    """Today's schedule, next meal and this month's budget standing"""
    return DashboardService.summary(store, at or datetime.now())
