from typing import List, Dict, Any, Mapping, Optional
from datetime import date
import logging

import anyio

from app.exceptions import NotFoundError, ServiceValidationError
from repositories import (
    EntityStore,
    MealRepository,
    PantryRepository,
    ShoppingItemRepository,
)
from core.utils.helpers import current_month, to_amount
from services.pantry_service import PantryService
from services import prompt_builder

logger = logging.getLogger("mealtrack.shopping")

Record = Dict[str, Any]


class ShoppingService:
    @staticmethod
    def list_for_month(store: EntityStore, month: Optional[str] = None) -> List[Record]:
        return ShoppingItemRepository(store).get_by_month(month or current_month())

    @staticmethod
    def add_item(store: EntityStore, fields: Mapping[str, Any], today: Optional[date] = None) -> Record:
        """Create a shopping item stamped with the current month"""
        body = dict(fields)
        if not body.get("name"):
            raise ServiceValidationError("Shopping item needs a name")
        body["price"] = to_amount(body.get("price"))
        body.setdefault("purchased", False)
        body["month"] = current_month(today)
        item = ShoppingItemRepository(store).create(body)
        logger.info(f"Shopping item {item['id']} added for {item['month']}")
        return item

    @staticmethod
    def set_purchased(store: EntityStore, item_id: str, purchased: bool = True,
                      today: Optional[date] = None) -> Dict[str, Any]:
        """
        Mark a shopping item purchased (or not).

        Marking it purchased also adds it to the pantry.

        Raises:
            NotFoundError: If the shopping item does not exist
        """
        item = ShoppingItemRepository(store).update(item_id, {"purchased": purchased})
        if item is None:
            raise NotFoundError(f"Shopping item {item_id} not found")
        pantry_item = None
        if purchased:
            pantry_item = PantryService.add_purchase_to_pantry(store, item, today)
        return {"item": item, "pantry_item": pantry_item}

    @staticmethod
    def spending_by_category(items: List[Record]) -> Dict[str, float]:
        spending: Dict[str, float] = {}
        for item in items:
            key = str(item.get("category") or "misc")
            spending[key] = spending.get(key, 0) + to_amount(item.get("price"))
        return spending

    @staticmethod
    def summary(store: EntityStore, month: Optional[str] = None) -> Dict[str, Any]:
        month = month or current_month()
        items = ShoppingItemRepository(store).get_by_month(month)
        return {
            "month": month,
            "total_items": len(items),
            "purchased_count": sum(1 for i in items if i.get("purchased") is True),
            "total": sum(to_amount(i.get("price")) for i in items),
            "by_category": ShoppingService.spending_by_category(items),
        }

    @staticmethod
    async def generate_from_meals(store: EntityStore, integration, month: Optional[str] = None) -> List[Record]:
        """
        Generate this month's shopping list from the planned meals.

        Raises:
            ServiceValidationError: If no meals are planned in the month
        """
        month = month or current_month()
        meals = await anyio.to_thread.run_sync(MealRepository(store).get_by_month, month)
        names = [m["name"] for m in meals if m.get("name")]
        if not names:
            raise ServiceValidationError("No meals planned yet. Add some meals first!")
        pantry = await anyio.to_thread.run_sync(PantryRepository(store).list)

        result = await integration.invoke_llm(prompt_builder.shopping_list_prompt(names, pantry))
        items = [i for i in (result.get("items") or []) if isinstance(i, dict)]
        if not items:
            logger.warning(f"Shopping list generation for {month} returned no items")
            return []
        created = await anyio.to_thread.run_sync(
            ShoppingItemRepository(store).bulk_create,
            [{**i, "month": month, "purchased": False} for i in items],
        )
        logger.info(f"Generated {len(created)} shopping items for {month}")
        return created
