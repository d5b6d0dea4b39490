"""Content-generation integration routes"""

from fastapi import APIRouter, Depends
import logging
from typing import Any, Dict

from api.dependencies import get_integration_service
from domain.schemas import InvokeLLMRequest
from services.integration_service import IntegrationService

router = APIRouter(prefix="/integrations", tags=["Integrations"])
logger = logging.getLogger("mealtrack.api.integrations")


@router.post("/invoke-llm", response_model=Dict[str, Any])
async def invoke_llm(
    payload: InvokeLLMRequest,
    integration: IntegrationService = Depends(get_integration_service),
):
    """
    Answer a prompt with generated JSON.

    The response shape depends on the prompt wording: analytics insights,
    a shopping list, a recipe, meal swap suggestions, or otherwise a
    multi-day meal plan.
    """
    return await integration.invoke_llm(payload.prompt, payload.response_json_schema)
