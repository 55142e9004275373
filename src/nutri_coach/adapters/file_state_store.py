"""JSON file storage for the key-value state slot."""

from dataclasses import dataclass
from pathlib import Path

from nutri_coach.services.persistence import KeyValueStore


@dataclass
class FileStateStore(KeyValueStore):
    """Stores each key as a ``<key>.json`` file under a directory."""

    root: Path

    def read(self, key: str) -> str | None:
        """Return the file contents for a key, if the file exists."""
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        """Replace the file for a key atomically."""
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def _path_for(self, key: str) -> Path:
        return self.root / f"{key}.json"
