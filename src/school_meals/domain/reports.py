"""Domain models for tabular reports."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from school_meals.domain.inventory import FoodItem


class ReportType(StrEnum):
    """Reports the service can produce."""

    FULL_INVENTORY = "full_inventory"
    LOW_STOCK = "low_stock"
    SCHEDULE = "schedule"

    @property
    def title(self) -> str:
        return _TITLES[self]


_TITLES = {
    ReportType.FULL_INVENTORY: "Full Inventory Report",
    ReportType.LOW_STOCK: "Low Stock Items Report",
    ReportType.SCHEDULE: "Meal Schedule Report",
}


@dataclass(frozen=True)
class Report:
    """Generated report with rows keyed by column name."""

    report_type: ReportType
    title: str
    start: date
    end: date
    generated_at: datetime
    rows: list[dict[str, object]]
    summary: str


@dataclass(frozen=True)
class DashboardSummary:
    """Headline inventory figures."""

    total_items: int
    low_stock_count: int
    top_items: list[FoodItem]
    low_stock_items: list[FoodItem]
