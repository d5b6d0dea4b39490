"""
Mock content-generation integration.

Stands in for an external LLM: the prompt is classified by substring against
an ordered route table and answered with a canned or sampled JSON payload.
"""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import anyio

from app.config import settings
from core.base.base_service import BaseService
from domain import mock_responses


Payload = Dict[str, Any]


@dataclass(frozen=True)
class PromptRoute:
    """One entry of the dispatch table"""

    name: str
    predicate: Callable[[str], bool]
    handler: Callable[[str], Payload]


def contains(phrase: str) -> Callable[[str], bool]:
    """Predicate matching prompts that contain ``phrase`` (case-sensitive)"""

    def _match(prompt: str) -> bool:
        return phrase in prompt

    return _match


def parse_plan_days(prompt: str) -> int:
    """Number of days a meal-plan prompt asks for (7 when not stated)"""
    for phrase, days in mock_responses.PLAN_LENGTH_PHRASES:
        if phrase in prompt:
            return days
    return mock_responses.DEFAULT_PLAN_DAYS


class OptionPool:
    """
    Sampling without replacement over a fixed list of options.

    Every option is drawn once before any repeats. When the pool is exhausted
    it resets, and the next draw may pick any option again, including the one
    drawn just before the reset.
    """

    def __init__(self, options: Sequence[Mapping[str, Any]], rng: random.Random):
        if not options:
            raise ValueError("OptionPool needs at least one option")
        self._options = list(options)
        self._rng = rng
        self._used: List[int] = []

    def draw(self) -> Payload:
        available = [i for i in range(len(self._options)) if i not in self._used]
        if not available:
            self._used = []
            available = list(range(len(self._options)))
        index = self._rng.choice(available)
        self._used.append(index)
        return copy.deepcopy(dict(self._options[index]))


class IntegrationService(BaseService):
    """
    Mock ``InvokeLLM`` endpoint.

    Routes are evaluated in order and the first matching predicate answers;
    prompts matching nothing get a generated multi-day meal plan.
    """

    def __init__(self, delay_sec: Optional[float] = None, rng: Optional[random.Random] = None):
        super().__init__("mealtrack.integrations")
        self.delay_sec = settings.llm_mock_delay_sec if delay_sec is None else delay_sec
        self.rng = rng or random.Random()
        self.routes: List[PromptRoute] = [
            PromptRoute("analytics_insights", contains("Analyze this meal planning data"),
                        self._canned(mock_responses.ANALYTICS_INSIGHTS)),
            PromptRoute("shopping_list", contains("Generate a shopping list"),
                        self._canned(mock_responses.SHOPPING_LIST)),
            PromptRoute("recipe", contains("detailed recipe"),
                        self._canned(mock_responses.RECIPE)),
            PromptRoute("meal_swaps", contains("Suggest 2-3 alternative meals"),
                        self._canned(mock_responses.MEAL_SWAPS)),
        ]
        self.default_route = PromptRoute("meal_plan", lambda prompt: True, self.generate_meal_plan)

    @staticmethod
    def _canned(payload: Payload) -> Callable[[str], Payload]:
        def _handler(prompt: str) -> Payload:
            return copy.deepcopy(payload)

        return _handler

    def resolve(self, prompt: str) -> PromptRoute:
        """Return the route that answers ``prompt``"""
        for route in self.routes:
            if route.predicate(prompt):
                return route
        return self.default_route

    def respond(self, prompt: str) -> Payload:
        """Answer ``prompt`` immediately (no simulated latency)"""
        route = self.resolve(prompt or "")
        self.log_debug("Mock LLM invoked", route=route.name, prompt_chars=len(prompt or ""))
        return route.handler(prompt or "")

    async def invoke_llm(self, prompt: str, response_json_schema: Optional[Mapping[str, Any]] = None) -> Payload:
        """
        Answer ``prompt`` after the configured artificial delay.

        ``response_json_schema`` is accepted for interface parity and ignored.
        There is no cancellation token: a caller that loses interest just
        drops the result.
        """
        if self.delay_sec > 0:
            await anyio.sleep(self.delay_sec)
        return self.respond(prompt)

    def generate_meal_plan(self, prompt: str) -> Payload:
        """Build ``{"days": [...]}`` with breakfast, lunch and dinner per day"""
        num_days = parse_plan_days(prompt)
        pools = {
            slot: OptionPool(options, self.rng)
            for slot, options in mock_responses.MEAL_OPTION_POOLS.items()
        }
        days = [{slot: pool.draw() for slot, pool in pools.items()} for _ in range(num_days)]
        self.log_info("Generated mock meal plan", days=num_days)
        return {"days": days}
