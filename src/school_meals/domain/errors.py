"""Error types raised by stores and services."""

from uuid import UUID

from school_meals.domain.schedule import ScheduleEntry


class SchoolMealsError(Exception):
    """Base class for application errors."""


class NotFoundError(SchoolMealsError):
    """Raised when an operation targets a record that does not exist."""

    def __init__(self, entity: str, record_id: UUID) -> None:
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class ScheduleConflictError(SchoolMealsError):
    """Raised when a booking would duplicate an active one for the same slot."""

    def __init__(self, conflicting: ScheduleEntry) -> None:
        super().__init__(conflict_message(conflicting))
        self.conflicting = conflicting


class MenuGenerationError(SchoolMealsError):
    """Raised when the menu generator fails or returns unusable output."""


class EmptyInventoryError(MenuGenerationError):
    """Raised when a menu is requested while the inventory is empty."""


class ReportError(SchoolMealsError):
    """Base class for report generation errors."""


class InvalidReportPeriodError(ReportError):
    """Raised when a report period ends before it starts."""


class UnknownReportError(ReportError):
    """Raised for report types the service does not know."""


class StateStoreError(SchoolMealsError):
    """Raised when persisted state cannot be read or written."""


def conflict_message(entry: ScheduleEntry) -> str:
    """Format the user-facing message for a booking conflict."""
    return (
        f"You already have a booking for {entry.meal_type.label} "
        f"on {entry.date:%d/%m/%Y}."
    )
