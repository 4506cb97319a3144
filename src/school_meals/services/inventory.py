"""Inventory store with write-through persistence."""

import json
import logging
import threading
from dataclasses import dataclass, field, replace
from uuid import UUID, uuid4

from school_meals.domain.errors import NotFoundError, StateStoreError
from school_meals.domain.inventory import FoodItem, InventorySnapshotItem, NewFoodItem
from school_meals.services.serialization import parse_id
from school_meals.services.state import StateStore, load_blob

INVENTORY_KEY = "merendaInventory"

DEFAULT_INVENTORY: tuple[NewFoodItem, ...] = (
    NewFoodItem(
        name="Brown Rice",
        quantity=50,
        unit="kg",
        nutritional_info="Rich in fiber and B-complex vitamins.",
        low_stock_threshold=10,
    ),
    NewFoodItem(
        name="Carioca Beans",
        quantity=40,
        unit="kg",
        nutritional_info="Source of plant protein, iron and fiber.",
        low_stock_threshold=10,
    ),
    NewFoodItem(
        name="Chicken Breast",
        quantity=30,
        unit="kg",
        nutritional_info="Lean protein, vitamins B6 and B12.",
        low_stock_threshold=5,
    ),
    NewFoodItem(
        name="Apple",
        quantity=100,
        unit="un",
        nutritional_info="Rich in fiber, vitamin C and antioxidants.",
        low_stock_threshold=20,
    ),
    NewFoodItem(
        name="Carrot",
        quantity=20,
        unit="kg",
        nutritional_info="Source of vitamin A (beta-carotene) and fiber.",
        low_stock_threshold=5,
    ),
    NewFoodItem(
        name="Powdered Milk",
        quantity=15,
        unit="kg",
        nutritional_info="Source of calcium and protein.",
        low_stock_threshold=3,
    ),
)

logger = logging.getLogger(__name__)


@dataclass
class InventoryStore:
    """Owns the food item collection and mirrors it to a state store."""

    state_store: StateStore
    key: str = INVENTORY_KEY
    seed: tuple[NewFoodItem, ...] = DEFAULT_INVENTORY
    _items: list[FoodItem] = field(init=False, default_factory=list)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)

    def __post_init__(self) -> None:
        blob = load_blob(self.state_store, self.key)
        if blob is None:
            self._items = [_create(item) for item in self.seed]
            logger.info("Seeded inventory with %d default items", len(self._items))
        else:
            self._items = _parse_items(blob)

    def list_items(self) -> list[FoodItem]:
        """Return all items in insertion order."""
        return list(self._items)

    def get_by_id(self, item_id: UUID) -> FoodItem | None:
        """Return an item by id, if present."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def list_low_stock(self) -> list[FoodItem]:
        """Return items whose quantity is below their threshold."""
        return [item for item in self._items if item.is_low_stock]

    def snapshot(self) -> list[InventorySnapshotItem]:
        """Return the projection used for menu generation."""
        return [
            InventorySnapshotItem(
                name=item.name,
                quantity=item.quantity,
                nutritional_info=item.nutritional_info,
            )
            for item in self._items
        ]

    def add(self, new_item: NewFoodItem) -> FoodItem:
        """Create an item with a fresh id and persist the collection."""
        with self._lock:
            created = _create(new_item)
            self._commit([*self._items, created])
        logger.info("Added food item %s (%s)", created.id, created.name)
        return created

    def update(self, item: FoodItem) -> FoodItem:
        """Replace the item with the same id."""
        with self._lock:
            self._commit(self._replaced(item))
        return item

    def adjust_quantity(self, item_id: UUID, new_quantity: float) -> FoodItem:
        """Set an item's quantity, clamping negative values to zero."""
        with self._lock:
            current = self.get_by_id(item_id)
            if current is None:
                raise NotFoundError("Food item", item_id)
            adjusted = replace(current, quantity=max(0, new_quantity))
            self._commit(self._replaced(adjusted))
        if adjusted.is_low_stock:
            logger.info(
                "Food item %s is low on stock (%s %s)",
                adjusted.name,
                adjusted.quantity,
                adjusted.unit,
            )
        return adjusted

    def delete(self, item_id: UUID) -> None:
        """Remove an item if present."""
        with self._lock:
            remaining = [item for item in self._items if item.id != item_id]
            if len(remaining) == len(self._items):
                return
            self._commit(remaining)
        logger.info("Deleted food item %s", item_id)

    def _replaced(self, item: FoodItem) -> list[FoodItem]:
        if self.get_by_id(item.id) is None:
            raise NotFoundError("Food item", item.id)
        return [item if existing.id == item.id else existing for existing in self._items]

    def _commit(self, items: list[FoodItem]) -> None:
        """Persist the new collection, then make it current."""
        blob = _dump_items(items)
        try:
            self.state_store.save(self.key, blob)
        except Exception as exc:
            logger.exception("Failed to persist inventory")
            raise StateStoreError("Failed to persist inventory") from exc
        self._items = items


def _create(new_item: NewFoodItem) -> FoodItem:
    return FoodItem(
        id=uuid4(),
        name=new_item.name,
        quantity=new_item.quantity,
        unit=new_item.unit,
        nutritional_info=new_item.nutritional_info,
        low_stock_threshold=new_item.low_stock_threshold,
    )


def _dump_items(items: list[FoodItem]) -> str:
    """Serialize items using the browser-storage field names."""
    return json.dumps(
        [
            {
                "id": str(item.id),
                "name": item.name,
                "quantity": item.quantity,
                "unit": item.unit,
                "nutritionalInfo": item.nutritional_info,
                "lowStockThreshold": item.low_stock_threshold,
            }
            for item in items
        ],
        allow_nan=False,
    )


def _parse_items(blob: str) -> list[FoodItem]:
    """Parse a stored blob into food items."""
    try:
        rows = json.loads(blob)
        return [_parse_item(row) for row in rows]
    except (ValueError, KeyError, TypeError) as exc:
        raise StateStoreError("Stored inventory is malformed") from exc


def _parse_item(row: dict[str, object]) -> FoodItem:
    return FoodItem(
        id=parse_id(row["id"]),
        name=str(row.get("name", "")),
        quantity=float(row.get("quantity", 0)),
        unit=str(row.get("unit", "")),
        nutritional_info=str(row.get("nutritionalInfo", "")),
        low_stock_threshold=float(row.get("lowStockThreshold", 0)),
    )
