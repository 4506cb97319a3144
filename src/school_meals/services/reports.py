"""Report generation over inventory and schedule snapshots."""

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, date, datetime

from school_meals.domain.errors import InvalidReportPeriodError, UnknownReportError
from school_meals.domain.reports import DashboardSummary, Report, ReportType
from school_meals.domain.schedule import ScheduleStatus
from school_meals.services.inventory import InventoryStore
from school_meals.services.schedule import ScheduleStore

DASHBOARD_LIMIT = 5


@dataclass
class ReportService:
    """Builds tabular reports from the current store contents."""

    inventory: InventoryStore
    schedule: ScheduleStore

    def generate(
        self,
        report_type: str,
        start: date,
        end: date,
        owner: str | None = None,
    ) -> Report:
        """Generate a report for the inclusive period."""
        try:
            kind = ReportType(report_type)
        except ValueError as exc:
            raise UnknownReportError(f"Unknown report type: {report_type}") from exc
        if end < start:
            raise InvalidReportPeriodError("The end date must not precede the start")

        if kind is ReportType.FULL_INVENTORY:
            rows, summary = self._full_inventory()
        elif kind is ReportType.LOW_STOCK:
            rows, summary = self._low_stock()
        else:
            rows, summary = self._schedule(start, end, owner)

        return Report(
            report_type=kind,
            title=kind.title,
            start=start,
            end=end,
            generated_at=datetime.now(tz=UTC),
            rows=rows,
            summary=summary,
        )

    def dashboard(self) -> DashboardSummary:
        """Return headline inventory figures."""
        items = self.inventory.list_items()
        low_stock = self.inventory.list_low_stock()
        top_items = sorted(items, key=lambda item: item.quantity, reverse=True)
        return DashboardSummary(
            total_items=len(items),
            low_stock_count=len(low_stock),
            top_items=top_items[:DASHBOARD_LIMIT],
            low_stock_items=low_stock[:DASHBOARD_LIMIT],
        )

    def _full_inventory(self) -> tuple[list[dict[str, object]], str]:
        items = self.inventory.list_items()
        rows: list[dict[str, object]] = [
            {
                "name": item.name,
                "quantity": item.quantity,
                "unit": item.unit,
                "nutritional_info": item.nutritional_info,
                "low_stock_threshold": item.low_stock_threshold,
            }
            for item in items
        ]
        return rows, f"Total of {len(items)} items in inventory."

    def _low_stock(self) -> tuple[list[dict[str, object]], str]:
        items = self.inventory.list_low_stock()
        rows: list[dict[str, object]] = [
            {
                "name": item.name,
                "quantity": item.quantity,
                "unit": item.unit,
                "low_stock_threshold": item.low_stock_threshold,
                "restock_needed": item.low_stock_threshold - item.quantity,
            }
            for item in items
        ]
        return rows, f"{len(items)} item(s) are low on stock."

    def _schedule(
        self, start: date, end: date, owner: str | None
    ) -> tuple[list[dict[str, object]], str]:
        entries = self.schedule.list_between(start, end, owner)
        rows: list[dict[str, object]] = [
            {
                "date": entry.date.isoformat(),
                "meal_type": entry.meal_type.value,
                "student": entry.student_owner,
                "status": entry.status.value,
            }
            for entry in entries
        ]
        counts = Counter(entry.status for entry in entries)
        breakdown = ", ".join(
            f"{counts[status]} {status.value}" for status in ScheduleStatus
        )
        return rows, f"{len(entries)} booking(s) in the period: {breakdown}."
