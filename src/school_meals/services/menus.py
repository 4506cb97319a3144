"""Menu suggestion service backed by an LLM."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from school_meals.domain.errors import EmptyInventoryError, MenuGenerationError
from school_meals.domain.inventory import InventorySnapshotItem
from school_meals.domain.menu import MenuMealType, MenuSuggestion

DEFAULT_GUIDELINES = (
    "Focus on whole foods, low sugar and sodium, and variety across food groups."
)

MENU_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "menuSuggestions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "ingredients": {"type": "array", "items": {"type": "string"}},
                    "nutritionalValue": {"type": "string"},
                },
                "required": ["name", "ingredients", "nutritionalValue"],
                "additionalProperties": False,
            },
        },
        "reasoning": {"type": "string"},
    },
    "required": ["menuSuggestions", "reasoning"],
    "additionalProperties": False,
}

logger = logging.getLogger(__name__)


class MenuClient(Protocol):
    """Interface for LLM menu generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured menu suggestion data."""


@dataclass
class MenuService:
    """Service that builds menu prompts and validates results."""

    client: MenuClient
    model: str
    reasoning_effort: str | None
    store: bool
    timeout_seconds: float = 60.0

    async def generate_menu(
        self,
        inventory: list[InventorySnapshotItem],
        meal_type: MenuMealType,
        guidelines: str = DEFAULT_GUIDELINES,
    ) -> MenuSuggestion:
        """Suggest menu items that use only the given inventory.

        Any failure of the remote call, including a timeout, is raised as
        MenuGenerationError with the underlying error chained. No retries.
        """
        if not inventory:
            raise EmptyInventoryError("There are no items in stock to build a menu")
        prompt = build_prompt(inventory, meal_type, guidelines)
        try:
            raw = await asyncio.wait_for(
                self.client.generate(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    schema=MENU_SCHEMA,
                    prompt=prompt,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise MenuGenerationError(
                f"Menu generation timed out after {self.timeout_seconds:g}s"
            ) from exc
        except Exception as exc:
            raise MenuGenerationError(str(exc) or type(exc).__name__) from exc
        try:
            suggestion = MenuSuggestion.model_validate(raw)
        except ValidationError as exc:
            raise MenuGenerationError("The model returned no valid suggestions") from exc
        logger.info(
            "Generated %d %s suggestions", len(suggestion.menu_items), meal_type
        )
        return suggestion


def build_prompt(
    inventory: list[InventorySnapshotItem],
    meal_type: MenuMealType,
    guidelines: str,
) -> str:
    """Render the nutritionist prompt for a menu request."""
    stock_lines = "\n".join(
        f"- {item.name} (Quantity: {item.quantity:g}, "
        f"Nutritional Info: {item.nutritional_info})"
        for item in inventory
    )
    return (
        "You are a nutritionist creating a school menu based on available "
        "inventory and nutritional guidelines.\n\n"
        f"Available Inventory:\n{stock_lines}\n\n"
        f"Meal Type: {meal_type.value}\n\n"
        f"Nutritional Guidelines: {guidelines}\n\n"
        "Suggest menu items using only the available inventory and adhering to "
        "the nutritional guidelines. Provide a reasoning for your suggestions."
    )
