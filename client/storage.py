from __future__ import annotations

import json
import logging
import os
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStoragePort(Protocol):
    """String key/value persistence, shaped like the browser's localStorage."""

    def get_item(self, key: str) -> Optional[str]: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class InMemoryStorage(KeyValueStoragePort):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.store: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.store.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.store[key] = value

    def remove_item(self, key: str) -> None:
        self.store.pop(key, None)


class JsonFileStorage(KeyValueStoragePort):
    """
    All keys in one JSON object on disk. A missing, unreadable or corrupt file
    reads as empty; the next write replaces it.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = f"{self.path}.tmp"
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False)
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
