"""Local key-value storage used to cache the device fingerprint.

The client only needs get/set of short string values. Host apps with their
own secure storage implement KeyValueStore; MemoryStore is for tests and
short-lived processes, JsonFileStore persists to a small JSON file.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from loguru import logger


class KeyValueStore(ABC):
    """Minimal get/set store. Values are strings (bytes are decoded as UTF-8)."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is not set."""

    @abstractmethod
    def set(self, key: str, value: Union[str, bytes]) -> None:
        """Store a value, replacing any previous one."""


def _as_text(value: Union[str, bytes]) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class MemoryStore(KeyValueStore):
    """In-process dict store. Cleared when the process exits."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: Union[str, bytes]) -> None:
        self._data[key] = _as_text(value)

    def clear(self) -> None:
        self._data.clear()


class JsonFileStore(KeyValueStore):
    """Flat JSON object on disk, e.g. ~/.whyleloop/store.json.

    Writes go to a temp file that is then renamed over the target, so a
    crash mid-write leaves the previous contents intact. An unreadable or
    corrupt file reads as empty.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: Union[str, bytes]) -> None:
        data = self._load()
        data[key] = _as_text(value)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
