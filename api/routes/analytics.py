"""Analytics, budget and alert routes"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from api.dependencies import get_entity_store, get_integration_service
from domain.enums import BudgetPeriod
from core.utils.helpers import current_month
from domain.schemas import AlertResponse, BudgetOverviewResponse
from repositories import EntityStore
from services.alerts_service import AlertsService
from services.analytics_service import AnalyticsService
from services.integration_service import IntegrationService

router = APIRouter(tags=["Analytics"])
logger = logging.getLogger("mealtrack.api.analytics")

MONTH_PATTERN = r"^\d{4}-\d{2}$"


@router.get("/analytics/monthly", response_model=Dict[str, Any])
def monthly_report(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, defaults to this month"),
    store: EntityStore = Depends(get_entity_store),
):
    """Spending, waste score and nutrition aggregates of one month"""
    return AnalyticsService.monthly_report(store, month)


@router.get("/analytics/export", response_class=PlainTextResponse)
def export_month(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, defaults to this month"),
    store: EntityStore = Depends(get_entity_store),
):
    """Meals, shopping list and pantry of one month as CSV"""
    month = month or current_month()
    return PlainTextResponse(
        AnalyticsService.export_month_csv(store, month),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="mealtrack-report-{month}.csv"'},
    )


@router.post("/analytics/insights", response_model=List[Dict[str, Any]])
async def monthly_insights(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    store: EntityStore = Depends(get_entity_store),
    integration: IntegrationService = Depends(get_integration_service),
):
    """Generated insights on the monthly report"""
    return await AnalyticsService.generate_insights(store, integration, month)


@router.get("/analytics/budget", response_model=BudgetOverviewResponse)
def budget_overview(
    period: BudgetPeriod = Query(BudgetPeriod.MONTH),
    selected_date: Optional[date] = Query(None, description="Reference day, defaults to today"),
    store: EntityStore = Depends(get_entity_store),
):
    """Planned meal spending against the day, week or month budget"""
    return AnalyticsService.get_budget_overview(store, period, selected_date or date.today())


@router.get("/alerts", response_model=List[AlertResponse])
def get_alerts(store: EntityStore = Depends(get_entity_store)):
    """Dashboard alerts, highest priority first"""
    return AlertsService.get_alerts(store)
