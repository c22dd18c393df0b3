"""
Result Cache

Maps the exact input text of a generation request to the deck it produced.
Entries are kept newest-first; inserting pushes to the front and the oldest
insertion falls off once the cache is full. Reads never reorder entries.

Persistence is best-effort: the whole cache is stored as a JSON array in a
single storage slot, and any failure reading or writing that slot is logged
and otherwise ignored.
"""
import json
import logging
import threading
import time
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from remarkdeck.core.storage import SlotStore
from remarkdeck.models.deck import CachedDeck, Deck

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 10
DEFAULT_SLOT = "ai-slides-cache"

# DeckCache.list shadows the builtin inside the class body
CachedDeckList = list[CachedDeck]

_ENTRIES_ADAPTER = TypeAdapter(CachedDeckList)


def _now_ms() -> int:
    return int(time.time() * 1000)


class DeckCache:
    """Content-addressed, bounded, insertion-ordered deck cache."""

    def __init__(
        self,
        store: Optional[SlotStore] = None,
        slot: str = DEFAULT_SLOT,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], int] = _now_ms,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._store = store
        self._slot = slot
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: CachedDeckList = self._load()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> Optional[Deck]:
        """Get the deck cached for an exact input text, or None."""
        with self._lock:
            for entry in self._entries:
                if entry.input == key:
                    return entry.deck
            return None

    def put(self, key: str, deck: Deck) -> None:
        """Insert or replace an entry at the newest position, evicting the oldest."""
        entry = CachedDeck(input=key, deck=deck, timestamp=self._clock())
        with self._lock:
            remaining = [e for e in self._entries if e.input != key]
            self._entries = [entry, *remaining][: self._max_entries]
            self._save()

    def remove(self, key: str) -> None:
        """Drop the entry for a key, if any."""
        with self._lock:
            remaining = [e for e in self._entries if e.input != key]
            if len(remaining) != len(self._entries):
                self._entries = remaining
                self._save()

    def clear(self) -> None:
        """Drop every entry and the persisted slot."""
        with self._lock:
            self._entries = []
            if self._store is None:
                return
            try:
                self._store.delete(self._slot)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to clear cached decks: {e}")

    def list(self) -> CachedDeckList:
        """All entries, newest first."""
        with self._lock:
            return list(self._entries)

    def latest(self) -> Optional[Deck]:
        """The most recently inserted deck, or None when empty."""
        with self._lock:
            return self._entries[0].deck if self._entries else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return any(e.input == key for e in self._entries)

    def _load(self) -> CachedDeckList:
        if self._store is None:
            return []
        try:
            raw = self._store.read(self._slot)
            if raw is None:
                return []
            entries = _ENTRIES_ADAPTER.validate_json(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Failed to load cached decks, starting empty: {e}")
            return []
        return entries[: self._max_entries]

    def _save(self) -> None:
        if self._store is None:
            return
        try:
            payload = json.dumps([e.to_wire() for e in self._entries])
            self._store.write(self._slot, payload)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to save cached decks, continuing without persistence: {e}")
