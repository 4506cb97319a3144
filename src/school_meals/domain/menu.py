"""Models for menu suggestions."""

from enum import StrEnum

from pydantic import BaseModel, Field


class MenuMealType(StrEnum):
    """Meal types understood by the menu generator."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class MenuItem(BaseModel):
    """Single suggested dish."""

    name: str
    ingredients: list[str]
    nutritional_value: str = Field(alias="nutritionalValue")

    model_config = {"populate_by_name": True}


class MenuSuggestion(BaseModel):
    """Structured output for menu generation."""

    menu_items: list[MenuItem] = Field(alias="menuSuggestions")
    reasoning: str

    model_config = {"populate_by_name": True}
