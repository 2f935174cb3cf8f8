"""Persistence port for the catalog and order collections.

Each collection is stored as one JSON document under its own key. Stores
only ever read a whole document at startup and write a whole document
after each mutation.
"""

from pathlib import Path
from typing import Protocol

from loguru import logger

from .errors import PersistenceLoadFailure


class PersistencePort(Protocol):
    def load(self, key: str) -> str | None:
        """Return the stored JSON text for `key`, or None if nothing is stored.

        Raises:
            PersistenceLoadFailure: the record exists but cannot be read.
        """
        ...

    def save(self, key: str, value: str) -> None: ...


class InMemoryPersistence:
    """Dict-backed port, for tests and throwaway sessions."""

    def __init__(self, records: dict[str, str] | None = None) -> None:
        self.records: dict[str, str] = dict(records or {})

    def load(self, key: str) -> str | None:
        return self.records.get(key)

    def save(self, key: str, value: str) -> None:
        self.records[key] = value


class JsonFilePersistence:
    """Stores each key as `<directory>/<key>.json`."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceLoadFailure(key, str(exc)) from exc

    def save(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug("Saved {} ({} bytes)", path, len(value))
