import json

import pytest

from client.storage import InMemoryStorage, JsonFileStorage
from client.store import HISTORY_LIMIT, ClientStore
from media.domain.entities import ResolvedMedia


def _video(n: int) -> ResolvedMedia:
    return ResolvedMedia(type="video", url=f"https://cdn.example.com/{n}.mp4", title=f"clip {n}")


class _Clock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        self.now += 1
        return self.now


# ==============================================================================
# Startup
# ==============================================================================

def test_should_start_with_defaults_on_empty_storage():
    store = ClientStore(InMemoryStorage()).load()
    assert store.dark_mode is False
    assert store.history == []


@pytest.mark.parametrize("dark, history", [
    ("{not json", "[oops"),
    ('"yes"', '{"a": 1}'),
    ("1", "null"),
])
def test_should_ignore_malformed_stored_values(dark, history):
    # GIVEN
    storage = InMemoryStorage({"darkMode": dark, "downloadHistory": history})

    # WHEN
    store = ClientStore(storage).load()

    # THEN
    assert store.dark_mode is False
    assert store.history == []


def test_should_skip_malformed_history_entries_only():
    # GIVEN
    good = {"id": "1", "url": "https://cdn.example.com/1.mp4", "title": "a", "timestamp": 1, "type": "video"}
    storage = InMemoryStorage({"downloadHistory": json.dumps([good, {"id": "2"}, 42, "x"])})

    # WHEN
    store = ClientStore(storage).load()

    # THEN
    assert [e.id for e in store.history] == ["1"]


def test_should_restore_saved_state():
    storage = InMemoryStorage()
    first = ClientStore(storage, clock=_Clock()).load()
    first.set_dark_mode(True)
    first.add_to_history(_video(1))

    second = ClientStore(storage).load()

    assert second.dark_mode is True
    assert [e.title for e in second.history] == ["clip 1"]


# ==============================================================================
# Theme
# ==============================================================================

def test_should_persist_dark_mode_as_json_boolean():
    storage = InMemoryStorage()
    store = ClientStore(storage).load()

    assert store.toggle_dark_mode() is True
    assert storage.get_item("darkMode") == "true"
    assert store.toggle_dark_mode() is False
    assert storage.get_item("darkMode") == "false"


# ==============================================================================
# History
# ==============================================================================

def test_should_keep_most_recent_first():
    store = ClientStore(InMemoryStorage(), clock=_Clock()).load()
    store.add_to_history(_video(1))
    store.add_to_history(_video(2))
    assert [e.title for e in store.history] == ["clip 2", "clip 1"]


def test_should_cap_history():
    storage = InMemoryStorage()
    store = ClientStore(storage, clock=_Clock()).load()

    for n in range(HISTORY_LIMIT + 5):
        store.add_to_history(_video(n))

    assert len(store.history) == HISTORY_LIMIT
    assert store.history[0].title == f"clip {HISTORY_LIMIT + 4}"
    assert len(json.loads(storage.get_item("downloadHistory"))) == HISTORY_LIMIT


def test_should_record_first_image_for_image_posts():
    store = ClientStore(InMemoryStorage(), clock=_Clock()).load()
    entry = store.add_to_history(ResolvedMedia(
        type="image",
        images=["https://cdn.example.com/1.jpg", "https://cdn.example.com/2.jpg"],
        thumbnail="https://cdn.example.com/c.jpg",
    ))
    assert entry.url == "https://cdn.example.com/1.jpg"
    assert entry.type == "image"
    assert entry.thumbnail == "https://cdn.example.com/c.jpg"
    assert entry.title == "TikTok Media"


def test_history_is_a_copy():
    store = ClientStore(InMemoryStorage(), clock=_Clock()).load()
    store.add_to_history(_video(1))
    store.history.clear()
    assert len(store.history) == 1


def test_should_clear_history():
    storage = InMemoryStorage()
    store = ClientStore(storage, clock=_Clock()).load()
    store.add_to_history(_video(1))

    store.clear_history()

    assert store.history == []
    assert storage.get_item("downloadHistory") == "[]"


# ==============================================================================
# File storage
# ==============================================================================

def test_file_storage_round_trip(tmp_path):
    path = str(tmp_path / "nested" / "storage.json")
    storage = JsonFileStorage(path)

    storage.set_item("darkMode", "true")
    storage.set_item("downloadHistory", "[]")
    storage.remove_item("downloadHistory")

    assert JsonFileStorage(path).get_item("darkMode") == "true"
    assert JsonFileStorage(path).get_item("downloadHistory") is None


@pytest.mark.parametrize("content", ["{broken", "[1, 2]", ""])
def test_file_storage_reads_corrupt_file_as_empty(tmp_path, content):
    path = tmp_path / "storage.json"
    path.write_text(content, encoding="utf-8")

    storage = JsonFileStorage(str(path))

    assert storage.get_item("darkMode") is None
    storage.set_item("darkMode", "false")
    assert json.loads(path.read_text(encoding="utf-8")) == {"darkMode": "false"}


def test_history_ids_are_unique_within_the_same_millisecond():
    # GIVEN
    store = ClientStore(InMemoryStorage(), clock=lambda: 1_700_000_000.0).load()

    # WHEN
    first = store.add_to_history(_video(1))
    second = store.add_to_history(_video(2))

    # THEN
    assert first.timestamp == second.timestamp
    assert first.id != second.id
