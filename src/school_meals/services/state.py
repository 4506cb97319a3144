"""Key-value persistence for serialized store state."""

import logging
from dataclasses import dataclass
from typing import Protocol

from school_meals.domain.errors import StateStoreError

logger = logging.getLogger(__name__)


class StateStore(Protocol):
    """Persistence interface for named blobs of serialized state."""

    def load(self, key: str) -> str | None:
        """Return the blob saved under a key, if present."""

    def save(self, key: str, blob: str) -> None:
        """Replace the blob saved under a key."""


@dataclass
class InMemoryStateStore(StateStore):
    """Dict-backed state store for ephemeral runs."""

    _blobs: dict[str, str]

    def __init__(self, blobs: dict[str, str] | None = None) -> None:
        self._blobs = dict(blobs or {})

    def load(self, key: str) -> str | None:
        """Return the stored blob for a key."""
        return self._blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        """Store the blob for a key."""
        self._blobs[key] = blob


def load_blob(state_store: StateStore, key: str) -> str | None:
    """Load a blob, raising StateStoreError when the backend fails."""
    try:
        return state_store.load(key)
    except Exception as exc:
        logger.exception("Failed to load state %s", key)
        raise StateStoreError(f"Failed to load state {key}") from exc
