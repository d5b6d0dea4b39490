from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional
from datetime import date


class InvokeLLMRequest(BaseModel):
    """Prompt for the content-generation integration"""

    prompt: str = Field(..., description="Free-text prompt; its wording selects the response")
    response_json_schema: Optional[Dict[str, Any]] = Field(
        default=None, description="Accepted and ignored by the mock responder"
    )


class GeneratePlanRequest(BaseModel):
    start_date: date = Field(..., description="Date of the first planned day")
    period: Literal["week", "14", "month"] = "week"
    avoid_repeats: bool = True
    budget_aware: bool = True


class MealSwapRequest(BaseModel):
    name: str = Field(..., min_length=1)
    estimated_cost: Optional[float] = None


class GenerateShoppingRequest(BaseModel):
    month: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}$")


class PurchaseRequest(BaseModel):
    purchased: bool = True


class ShoppingItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = "staples"
    quantity: Optional[str] = None
    price: float = Field(default=0, ge=0)


class SettingsUpdate(BaseModel):
    """Partial update of the household settings"""

    monthly_budget: Optional[float] = Field(default=None, ge=0)
    household_size: Optional[int] = Field(default=None, ge=1)
    food_preference: Optional[str] = None
    dietary_goals: Optional[List[str]] = None
    breakfast_time: Optional[str] = None
    lunch_time: Optional[str] = None
    dinner_time: Optional[str] = None
    nutrition_goals: Optional[Dict[str, float]] = None
    alert_preferences: Optional[Dict[str, Any]] = None
    budget_allocation: Optional[Dict[str, float]] = None


class BudgetOverviewResponse(BaseModel):
    period: str
    budget: float
    total_spent: float
    remaining: float
    percent_used: float
    is_over_budget: bool
    is_near_budget: bool
    meals_planned: int
    avg_per_meal: int
    by_meal_type: Dict[str, float]


class AlertResponse(BaseModel):
    type: str
    message: str
    link: str
    priority: int
