import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from txn_studio.exceptions import StorageConfigurationError
from txn_studio.settings import STORAGE_BACKENDS, Settings

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """String documents addressed by key, each read and written whole."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the document stored under `key`, or None if there is none."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove the document under `key`; missing keys are ignored."""
        pass


class InMemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._documents: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._documents.get(key)

    def set(self, key: str, value: str) -> None:
        self._documents[key] = value

    def remove(self, key: str) -> None:
        self._documents.pop(key, None)


class FileStorage(KeyValueStorage):
    """Stores each key as `<base_dir>/<key>.json`."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Write then rename so readers never see a half-written document.
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


def create_storage(settings: Settings) -> KeyValueStorage:
    """Create the storage backend named by the settings.

    Raises:
        StorageConfigurationError: If the backend name is not recognised.
    """
    backend = settings.get_storage_backend()
    logger.info(f"Using '{backend}' storage backend.")
    if backend == "memory":
        return InMemoryStorage()
    if backend == "file":
        return FileStorage(Path(settings.get_storage_dir()))
    if backend == "sql":
        # Local import: sql_storage subclasses KeyValueStorage from this module.
        from sqlmodel import create_engine

        from .sql_storage import SqlStorage

        storage = SqlStorage(create_engine(settings.get_database_url()))
        storage.create_tables()
        return storage
    raise StorageConfigurationError(
        f"Unknown storage backend '{backend}'. Valid backends are: {', '.join(STORAGE_BACKENDS)}"
    )
