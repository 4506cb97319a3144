"""Domain models for the food inventory."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class NewFoodItem:
    """Fields of a food item before an id is assigned."""

    name: str
    quantity: float
    unit: str
    nutritional_info: str
    low_stock_threshold: float


@dataclass(frozen=True)
class FoodItem:
    """Represents a food item held in stock."""

    id: UUID
    name: str
    quantity: float
    unit: str
    nutritional_info: str
    low_stock_threshold: float

    @property
    def is_low_stock(self) -> bool:
        return self.quantity < self.low_stock_threshold


@dataclass(frozen=True)
class InventorySnapshotItem:
    """Projection of a food item sent to the menu generator."""

    name: str
    quantity: float
    nutritional_info: str
