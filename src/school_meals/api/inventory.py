"""Inventory API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, Response, status

from school_meals.api.models import FoodItemIn, FoodItemOut, QuantityIn

if TYPE_CHECKING:
    from school_meals.containers import AppContainer

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("")
async def list_items(request: Request) -> list[FoodItemOut]:
    """Return every food item in stock order."""
    container: AppContainer = request.app.state.container
    return [
        FoodItemOut.from_domain(item)
        for item in container.inventory_store.list_items()
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_item(payload: FoodItemIn, request: Request) -> FoodItemOut:
    """Create a food item."""
    container: AppContainer = request.app.state.container
    created = container.inventory_store.add(payload.to_new_item())
    return FoodItemOut.from_domain(created)


@router.get("/low-stock")
async def list_low_stock(request: Request) -> list[FoodItemOut]:
    """Return items below their low-stock threshold."""
    container: AppContainer = request.app.state.container
    return [
        FoodItemOut.from_domain(item)
        for item in container.inventory_store.list_low_stock()
    ]


@router.get("/{item_id}")
async def get_item(item_id: UUID, request: Request) -> FoodItemOut:
    """Return a single food item."""
    container: AppContainer = request.app.state.container
    item = container.inventory_store.get_by_id(item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return FoodItemOut.from_domain(item)


@router.put("/{item_id}")
async def update_item(
    item_id: UUID, payload: FoodItemIn, request: Request
) -> FoodItemOut:
    """Replace a food item."""
    container: AppContainer = request.app.state.container
    updated = container.inventory_store.update(payload.to_item(item_id))
    return FoodItemOut.from_domain(updated)


@router.patch("/{item_id}/quantity")
async def adjust_quantity(
    item_id: UUID, payload: QuantityIn, request: Request
) -> FoodItemOut:
    """Set the stock level of a food item."""
    container: AppContainer = request.app.state.container
    adjusted = container.inventory_store.adjust_quantity(item_id, payload.quantity)
    return FoodItemOut.from_domain(adjusted)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: UUID, request: Request) -> Response:
    """Delete a food item. Deleting a missing item succeeds."""
    container: AppContainer = request.app.state.container
    container.inventory_store.delete(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
