from typing import List, Dict, Any, Optional
from datetime import date
import logging

from repositories import EntityStore, PantryRepository, ShoppingItemRepository
from core.utils.helpers import current_month, format_number, parse_float

logger = logging.getLogger("mealtrack.pantry")

Record = Dict[str, Any]

DEFAULT_PANTRY_UNIT = "units"


class PantryService:
    @staticmethod
    def low_stock_items(items: List[Record]) -> List[Record]:
        """
        Items whose leading-number quantity is at or below their threshold.

        Items without a quantity or a ``low_stock_threshold`` are never low.
        """
        low = []
        for item in items:
            if not item.get("quantity") or not item.get("low_stock_threshold"):
                continue
            quantity = parse_float(item["quantity"])
            threshold = parse_float(item["low_stock_threshold"])
            if quantity is not None and threshold is not None and quantity <= threshold:
                low.append(item)
        return low

    @staticmethod
    def get_low_stock(store: EntityStore) -> List[Record]:
        return PantryService.low_stock_items(PantryRepository(store).list())

    @staticmethod
    def group_by_category(items: List[Record]) -> Dict[str, List[Record]]:
        groups: Dict[str, List[Record]] = {}
        for item in items:
            groups.setdefault(str(item.get("category") or "misc"), []).append(item)
        return groups

    @staticmethod
    def add_purchase_to_pantry(store: EntityStore, shopping_item: Record,
                               today: Optional[date] = None) -> Record:
        """
        Add a purchased shopping item to the pantry.

        A pantry item with the same name (case-insensitive) gets the purchased
        quantity added to its own; otherwise a new pantry item is created.
        Unreadable quantities count as 0 on the pantry side and 1 on the
        purchase side.

        Args:
            store: Entity store
            shopping_item: The purchased ``ShoppingItem`` record
            today: Date stamped as ``last_updated``

        Returns:
            The updated or created pantry record
        """
        today = today or date.today()
        pantry = PantryRepository(store)
        with store.locked(pantry.entity_name):
            existing = pantry.get_by_name(shopping_item.get("name"))
            if existing is not None:
                current_qty = parse_float(existing.get("quantity")) or 0
                added_qty = parse_float(shopping_item.get("quantity")) or 1
                record = pantry.update(existing["id"], {
                    "quantity": format_number(current_qty + added_qty),
                    "last_updated": today.isoformat(),
                })
                logger.info(f"Pantry item {existing['id']} restocked from shopping item {shopping_item.get('id')}")
                return record
            record = pantry.create({
                "name": shopping_item.get("name"),
                "category": shopping_item.get("category"),
                "quantity": shopping_item.get("quantity") or "1",
                "unit": DEFAULT_PANTRY_UNIT,
                "last_updated": today.isoformat(),
            })
            logger.info(f"Pantry item {record['id']} created from shopping item {shopping_item.get('id')}")
            return record

    @staticmethod
    def sync_with_shopping(store: EntityStore, month: Optional[str] = None,
                           today: Optional[date] = None) -> List[Record]:
        """
        Push every purchased shopping item of ``month`` into the pantry.

        Each item is matched against the pantry as it stands at that point,
        so two purchases of the same new item create it once and then add to it.
        Running the sync twice adds the purchases twice.
        """
        today = today or date.today()
        month = month or current_month(today)
        purchased = ShoppingItemRepository(store).get_purchased(month)
        synced = [PantryService.add_purchase_to_pantry(store, item, today) for item in purchased]
        logger.info(f"Synced {len(synced)} purchased items of {month} into the pantry")
        return synced
