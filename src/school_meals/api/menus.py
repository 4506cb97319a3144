"""Menu generation API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from school_meals.api.models import MenuRequest
from school_meals.domain.menu import MenuSuggestion

if TYPE_CHECKING:
    from school_meals.containers import AppContainer

router = APIRouter(prefix="/menus", tags=["menus"])


@router.post("/generate", response_model_by_alias=False)
async def generate_menu(payload: MenuRequest, request: Request) -> MenuSuggestion:
    """Suggest a menu from the current inventory."""
    container: AppContainer = request.app.state.container
    return await container.menu_service.generate_menu(
        container.inventory_store.snapshot(),
        payload.meal_type,
        payload.guidelines,
    )
