"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.entity_schemas import (
    EntityRecord,
    BulkCreateRequest,
    FilterRequest,
    DeleteResponse,
)
from domain.schemas.auth_schemas import (
    LoginRequest,
    SignupRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserResponse,
    SessionResponse,
    OkResponse,
    AdminStatsResponse,
    PasswordResetResponse,
    AuditLogListResponse,
)
from domain.schemas.planner_schemas import (
    InvokeLLMRequest,
    GeneratePlanRequest,
    MealSwapRequest,
    GenerateShoppingRequest,
    PurchaseRequest,
    ShoppingItemCreate,
    SettingsUpdate,
    BudgetOverviewResponse,
    AlertResponse,
)

__all__ = [
    # Entity schemas
    "EntityRecord",
    "BulkCreateRequest",
    "FilterRequest",
    "DeleteResponse",
    # Auth schemas
    "LoginRequest",
    "SignupRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "UserResponse",
    "SessionResponse",
    "OkResponse",
    "AdminStatsResponse",
    "PasswordResetResponse",
    "AuditLogListResponse",
    # Planner, shopping and settings schemas
    "InvokeLLMRequest",
    "GeneratePlanRequest",
    "MealSwapRequest",
    "GenerateShoppingRequest",
    "PurchaseRequest",
    "ShoppingItemCreate",
    "SettingsUpdate",
    "BudgetOverviewResponse",
    "AlertResponse",
]
