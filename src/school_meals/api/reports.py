"""Reporting API endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from school_meals.api.models import DashboardOut, ReportOut

if TYPE_CHECKING:
    from school_meals.containers import AppContainer

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/dashboard")
async def dashboard(request: Request) -> DashboardOut:
    """Return headline inventory figures."""
    container: AppContainer = request.app.state.container
    return DashboardOut.from_domain(container.report_service.dashboard())


@router.get("/{report_type}")
async def generate_report(
    report_type: str,
    request: Request,
    start: date | None = None,
    end: date | None = None,
    owner: str | None = None,
) -> ReportOut:
    """Generate a report, defaulting to the current month to date."""
    container: AppContainer = request.app.state.container
    today = date.today()
    report = container.report_service.generate(
        report_type,
        start=start or today.replace(day=1),
        end=end or today,
        owner=owner,
    )
    return ReportOut.from_domain(report)
