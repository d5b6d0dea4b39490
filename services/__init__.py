"""Services package - Business logic layer"""

from services.auth_service import AuthService, ClientInfo
from services.integration_service import IntegrationService
from services.settings_service import SettingsService
from services.analytics_service import AnalyticsService
from services.alerts_service import AlertsService
from services.pantry_service import PantryService
from services.shopping_service import ShoppingService
from services.planner_service import PlannerService
from services.dashboard_service import DashboardService

# Note: prompt_builder contains prompt text functions, not a class

__all__ = [
    "AuthService",
    "ClientInfo",
    "IntegrationService",
    "SettingsService",
    "AnalyticsService",
    "AlertsService",
    "PantryService",
    "ShoppingService",
    "PlannerService",
    "DashboardService",
]
