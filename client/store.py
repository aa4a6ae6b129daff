from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Callable, List, Optional

from pydantic import BaseModel, ValidationError

from client.storage import KeyValueStoragePort
from media.domain.entities import MediaType, ResolvedMedia

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"
HISTORY_KEY = "downloadHistory"
HISTORY_LIMIT = 50


class HistoryEntry(BaseModel):
    id: str
    url: Optional[str] = None
    title: str = "TikTok Media"
    thumbnail: Optional[str] = None
    timestamp: int
    type: MediaType


class ClientStore:
    """
    Client-side state: theme flag and download history (most recent first,
    capped at HISTORY_LIMIT). Reads once in `load()`, writes through on every change.
    """

    def __init__(self, storage: KeyValueStoragePort, clock: Callable[[], float] = time.time):
        self.storage = storage
        self.clock = clock
        self._dark_mode = False
        self._history: List[HistoryEntry] = []

    # ---------- Startup ----------

    def load(self) -> "ClientStore":
        self._dark_mode = self._read_dark_mode()
        self._history = self._read_history()
        return self

    def _read_json(self, key: str):
        raw = self.storage.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed %s value in storage", key)
            return None

    def _read_dark_mode(self) -> bool:
        value = self._read_json(DARK_MODE_KEY)
        return value if isinstance(value, bool) else False

    def _read_history(self) -> List[HistoryEntry]:
        value = self._read_json(HISTORY_KEY)
        if not isinstance(value, list):
            return []
        entries: List[HistoryEntry] = []
        for item in value:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValidationError:
                continue
        return entries[:HISTORY_LIMIT]

    # ---------- Theme ----------

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    def set_dark_mode(self, enabled: bool) -> None:
        self._dark_mode = bool(enabled)
        self.storage.set_item(DARK_MODE_KEY, json.dumps(self._dark_mode))

    def toggle_dark_mode(self) -> bool:
        self.set_dark_mode(not self._dark_mode)
        return self._dark_mode

    # ---------- History ----------

    @property
    def history(self) -> List[HistoryEntry]:
        return list(self._history)

    def add_to_history(self, media: ResolvedMedia) -> HistoryEntry:
        now_ms = int(self.clock() * 1000)
        entry = HistoryEntry(
            id=uuid.uuid4().hex,
            url=media.images[0] if media.images else media.url,
            title=media.title or "TikTok Media",
            thumbnail=media.thumbnail,
            timestamp=now_ms,
            type=media.type,
        )
        self._history = [entry] + self._history[: HISTORY_LIMIT - 1]
        self._save_history()
        return entry

    def clear_history(self) -> None:
        self._history = []
        self._save_history()

    def _save_history(self) -> None:
        payload = [e.model_dump(mode="json") for e in self._history]
        self.storage.set_item(HISTORY_KEY, json.dumps(payload, ensure_ascii=False))
