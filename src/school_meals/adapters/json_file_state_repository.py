"""File-backed repository for serialized store state."""

from dataclasses import dataclass
from pathlib import Path

from school_meals.services.state import StateStore


@dataclass
class JsonFileStateStore(StateStore):
    """Keeps each state key in its own ``<key>.json`` file."""

    data_dir: Path

    def load(self, key: str) -> str | None:
        """Return the file contents for a key, if the file exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, blob: str) -> None:
        """Write the blob atomically by replacing a temporary file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(blob, encoding="utf-8")
        tmp_path.replace(path)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"
