"""Pydantic models for HTTP request and response payloads."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from school_meals.domain.inventory import FoodItem, NewFoodItem
from school_meals.domain.menu import MenuMealType
from school_meals.domain.reports import DashboardSummary, Report
from school_meals.domain.schedule import MealSlot, ScheduleEntry, ScheduleStatus
from school_meals.services.menus import DEFAULT_GUIDELINES


class FoodItemIn(BaseModel):
    """Food item form payload."""

    name: str = Field(min_length=1)
    quantity: float = Field(ge=0, allow_inf_nan=False)
    unit: str = Field(min_length=1)
    nutritional_info: str = ""
    low_stock_threshold: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("name", "unit")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    def to_new_item(self) -> NewFoodItem:
        return NewFoodItem(
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            nutritional_info=self.nutritional_info,
            low_stock_threshold=self.low_stock_threshold,
        )

    def to_item(self, item_id: UUID) -> FoodItem:
        return FoodItem(
            id=item_id,
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            nutritional_info=self.nutritional_info,
            low_stock_threshold=self.low_stock_threshold,
        )


class QuantityIn(BaseModel):
    """Quantity adjustment payload. Negative values are clamped to zero."""

    quantity: float = Field(allow_inf_nan=False)


class FoodItemOut(BaseModel):
    """Food item with derived stock status."""

    id: UUID
    name: str
    quantity: float
    unit: str
    nutritional_info: str
    low_stock_threshold: float
    is_low_stock: bool

    @classmethod
    def from_domain(cls, item: FoodItem) -> "FoodItemOut":
        return cls(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            nutritional_info=item.nutritional_info,
            low_stock_threshold=item.low_stock_threshold,
            is_low_stock=item.is_low_stock,
        )


class ScheduleIn(BaseModel):
    """Booking form payload."""

    date: dt.date
    meal_type: MealSlot
    owner: str | None = None

    @field_validator("date")
    @classmethod
    def _not_in_past(cls, value: dt.date) -> dt.date:
        if value < dt.date.today():
            raise ValueError("date cannot be in the past")
        return value


class ScheduleEntryOut(BaseModel):
    """Schedule entry payload."""

    id: UUID
    date: dt.date
    meal_type: MealSlot
    student_owner: str
    status: ScheduleStatus

    @classmethod
    def from_domain(cls, entry: ScheduleEntry) -> "ScheduleEntryOut":
        return cls(
            id=entry.id,
            date=entry.date,
            meal_type=entry.meal_type,
            student_owner=entry.student_owner,
            status=entry.status,
        )


class MenuRequest(BaseModel):
    """Menu generation request."""

    meal_type: MenuMealType
    guidelines: str = DEFAULT_GUIDELINES


class ReportOut(BaseModel):
    """Generated report payload."""

    report_type: str
    title: str
    start: dt.date
    end: dt.date
    generated_at: dt.datetime
    rows: list[dict[str, object]]
    summary: str

    @classmethod
    def from_domain(cls, report: Report) -> "ReportOut":
        return cls(
            report_type=report.report_type.value,
            title=report.title,
            start=report.start,
            end=report.end,
            generated_at=report.generated_at,
            rows=report.rows,
            summary=report.summary,
        )


class DashboardOut(BaseModel):
    """Dashboard summary payload."""

    total_items: int
    low_stock_count: int
    top_items: list[FoodItemOut]
    low_stock_items: list[FoodItemOut]

    @classmethod
    def from_domain(cls, summary: DashboardSummary) -> "DashboardOut":
        return cls(
            total_items=summary.total_items,
            low_stock_count=summary.low_stock_count,
            top_items=[FoodItemOut.from_domain(item) for item in summary.top_items],
            low_stock_items=[
                FoodItemOut.from_domain(item) for item in summary.low_stock_items
            ],
        )
