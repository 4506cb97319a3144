"""Domain models for student meal scheduling."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class MealSlot(StrEnum):
    """Meal slots a student can book."""

    MORNING_SNACK = "morning_snack"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon_snack"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class ScheduleStatus(StrEnum):
    """Lifecycle status of a schedule entry."""

    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"
    FULFILLED = "fulfilled"


@dataclass(frozen=True)
class ScheduleEntry:
    """A meal booked by a student for a given day."""

    id: UUID
    date: date
    meal_type: MealSlot
    student_owner: str
    status: ScheduleStatus = ScheduleStatus.SCHEDULED

    def blocks(self, owner: str, day: date, meal_type: MealSlot) -> bool:
        """Return True when this entry occupies the given owner's slot."""
        return (
            self.status is ScheduleStatus.SCHEDULED
            and self.student_owner == owner
            and self.date == day
            and self.meal_type == meal_type
        )
