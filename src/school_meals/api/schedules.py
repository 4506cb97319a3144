"""Meal scheduling API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from school_meals.api.models import ScheduleEntryOut, ScheduleIn

if TYPE_CHECKING:
    from school_meals.containers import AppContainer

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.get("")
async def list_schedules(
    request: Request, owner: str | None = None
) -> list[ScheduleEntryOut]:
    """Return a student's bookings, defaulting to the simulated student."""
    container: AppContainer = request.app.state.container
    resolved_owner = owner or container.settings.simulated_student
    return [
        ScheduleEntryOut.from_domain(entry)
        for entry in container.schedule_store.list_by_owner(resolved_owner)
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_schedule(payload: ScheduleIn, request: Request) -> ScheduleEntryOut:
    """Book a meal slot."""
    container: AppContainer = request.app.state.container
    entry = container.schedule_store.add(
        payload.date,
        payload.meal_type,
        payload.owner or container.settings.simulated_student,
    )
    return ScheduleEntryOut.from_domain(entry)


@router.put("/{entry_id}")
async def update_schedule(
    entry_id: UUID, payload: ScheduleIn, request: Request
) -> ScheduleEntryOut:
    """Move a booking to another day or slot."""
    container: AppContainer = request.app.state.container
    entry = container.schedule_store.update(entry_id, payload.date, payload.meal_type)
    return ScheduleEntryOut.from_domain(entry)


@router.post("/{entry_id}/cancel")
async def cancel_schedule(entry_id: UUID, request: Request) -> ScheduleEntryOut:
    """Cancel a booking."""
    container: AppContainer = request.app.state.container
    return ScheduleEntryOut.from_domain(container.schedule_store.cancel(entry_id))


@router.post("/{entry_id}/fulfill")
async def fulfill_schedule(entry_id: UUID, request: Request) -> ScheduleEntryOut:
    """Mark a booking as served."""
    container: AppContainer = request.app.state.container
    return ScheduleEntryOut.from_domain(container.schedule_store.fulfill(entry_id))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_schedule(entry_id: UUID, request: Request) -> Response:
    """Remove a booking. Removing a missing booking succeeds."""
    container: AppContainer = request.app.state.container
    container.schedule_store.remove(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
