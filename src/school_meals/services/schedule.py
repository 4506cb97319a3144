"""Meal schedule store with booking conflict detection."""

import json
import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

from school_meals.domain.errors import (
    NotFoundError,
    ScheduleConflictError,
    StateStoreError,
)
from school_meals.domain.schedule import MealSlot, ScheduleEntry, ScheduleStatus
from school_meals.services.serialization import dump_day, parse_day, parse_id
from school_meals.services.state import StateStore, load_blob

SCHEDULE_KEY = "merendaAgendamentos"

logger = logging.getLogger(__name__)


@dataclass
class ScheduleStore:
    """Owns schedule entries for all students.

    At most one ``scheduled`` entry may exist per owner, day and meal slot.
    The check runs under the store lock together with the write, so two
    threads booking the same slot cannot both succeed. The async HTTP
    handlers call the store directly on the event loop.
    """

    state_store: StateStore
    key: str = SCHEDULE_KEY
    _entries: list[ScheduleEntry] = field(init=False, default_factory=list)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)

    def __post_init__(self) -> None:
        blob = load_blob(self.state_store, self.key)
        self._entries = _sorted(_parse_entries(blob)) if blob is not None else []

    def list_entries(self) -> list[ScheduleEntry]:
        """Return every entry, ascending by date."""
        return list(self._entries)

    def list_by_owner(self, owner: str) -> list[ScheduleEntry]:
        """Return one student's entries, ascending by date."""
        return [entry for entry in self._entries if entry.student_owner == owner]

    def list_between(
        self, start: date, end: date, owner: str | None = None
    ) -> list[ScheduleEntry]:
        """Return entries dated within the inclusive range."""
        return [
            entry
            for entry in self._entries
            if start <= entry.date <= end
            and (owner is None or entry.student_owner == owner)
        ]

    def get_by_id(self, entry_id: UUID) -> ScheduleEntry | None:
        """Return an entry by id, if present."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def add(self, day: date, meal_type: MealSlot, owner: str) -> ScheduleEntry:
        """Book a meal slot for a student.

        Raises ScheduleConflictError, leaving the store untouched, when the
        student already has an active booking for the same day and slot.
        """
        meal_type = MealSlot(meal_type)
        with self._lock:
            self._check_conflict(owner, day, meal_type)
            entry = ScheduleEntry(
                id=uuid4(),
                date=day,
                meal_type=meal_type,
                student_owner=owner,
            )
            self._commit([*self._entries, entry])
        logger.info("Scheduled %s for %s on %s", meal_type, owner, day)
        return entry

    def update(self, entry_id: UUID, day: date, meal_type: MealSlot) -> ScheduleEntry:
        """Move an entry to a new day and slot, making it active again."""
        meal_type = MealSlot(meal_type)
        with self._lock:
            current = self._require(entry_id)
            self._check_conflict(
                current.student_owner, day, meal_type, exclude_id=entry_id
            )
            updated = replace(
                current,
                date=day,
                meal_type=meal_type,
                status=ScheduleStatus.SCHEDULED,
            )
            self._commit(self._replaced(updated))
        logger.info("Rescheduled entry %s to %s on %s", entry_id, meal_type, day)
        return updated

    def cancel(self, entry_id: UUID) -> ScheduleEntry:
        """Mark an entry as cancelled, freeing its slot."""
        return self._set_status(entry_id, ScheduleStatus.CANCELLED)

    def fulfill(self, entry_id: UUID) -> ScheduleEntry:
        """Mark an entry as served."""
        return self._set_status(entry_id, ScheduleStatus.FULFILLED)

    def remove(self, entry_id: UUID) -> None:
        """Delete an entry if present."""
        with self._lock:
            remaining = [entry for entry in self._entries if entry.id != entry_id]
            if len(remaining) == len(self._entries):
                return
            self._commit(remaining)
        logger.info("Removed schedule entry %s", entry_id)

    def _set_status(self, entry_id: UUID, status: ScheduleStatus) -> ScheduleEntry:
        with self._lock:
            updated = replace(self._require(entry_id), status=status)
            self._commit(self._replaced(updated))
        logger.info("Schedule entry %s is now %s", entry_id, status)
        return updated

    def _check_conflict(
        self,
        owner: str,
        day: date,
        meal_type: MealSlot,
        exclude_id: UUID | None = None,
    ) -> None:
        for entry in self._entries:
            if entry.id != exclude_id and entry.blocks(owner, day, meal_type):
                logger.info(
                    "Booking conflict for %s: %s on %s", owner, meal_type, day
                )
                raise ScheduleConflictError(entry)

    def _require(self, entry_id: UUID) -> ScheduleEntry:
        entry = self.get_by_id(entry_id)
        if entry is None:
            raise NotFoundError("Schedule entry", entry_id)
        return entry

    def _replaced(self, updated: ScheduleEntry) -> list[ScheduleEntry]:
        return [
            updated if entry.id == updated.id else entry for entry in self._entries
        ]

    def _commit(self, entries: list[ScheduleEntry]) -> None:
        """Sort and persist the new collection, then make it current."""
        ordered = _sorted(entries)
        blob = _dump_entries(ordered)
        try:
            self.state_store.save(self.key, blob)
        except Exception as exc:
            logger.exception("Failed to persist schedule")
            raise StateStoreError("Failed to persist schedule") from exc
        self._entries = ordered


def _sorted(entries: list[ScheduleEntry]) -> list[ScheduleEntry]:
    return sorted(entries, key=lambda entry: entry.date)


def _dump_entries(entries: list[ScheduleEntry]) -> str:
    """Serialize entries using the browser-storage field names."""
    return json.dumps(
        [
            {
                "id": str(entry.id),
                "date": dump_day(entry.date),
                "mealType": entry.meal_type.value,
                "studentName": entry.student_owner,
                "status": entry.status.value,
            }
            for entry in entries
        ],
        allow_nan=False,
    )


def _parse_entries(blob: str) -> list[ScheduleEntry]:
    """Parse a stored blob into schedule entries."""
    try:
        return [_parse_entry(row) for row in json.loads(blob)]
    except (ValueError, KeyError, TypeError) as exc:
        raise StateStoreError("Stored schedule is malformed") from exc


# Portuguese values written by the legacy browser client.
_LEGACY_MEAL_TYPES = {
    "lanche_manha": MealSlot.MORNING_SNACK,
    "almoco": MealSlot.LUNCH,
    "lanche_tarde": MealSlot.AFTERNOON_SNACK,
}
_LEGACY_STATUSES = {
    "agendado": ScheduleStatus.SCHEDULED,
    "cancelado": ScheduleStatus.CANCELLED,
    "realizado": ScheduleStatus.FULFILLED,
}


def _parse_entry(row: dict[str, object]) -> ScheduleEntry:
    meal_type = str(row["mealType"])
    status = str(row.get("status", ScheduleStatus.SCHEDULED))
    return ScheduleEntry(
        id=parse_id(row["id"]),
        date=parse_day(row["date"]),
        meal_type=_LEGACY_MEAL_TYPES.get(meal_type) or MealSlot(meal_type),
        student_owner=str(row["studentName"]),
        status=_LEGACY_STATUSES.get(status) or ScheduleStatus(status),
    )
