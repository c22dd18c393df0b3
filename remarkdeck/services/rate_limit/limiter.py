"""
Sliding-window rate limiter.

Each identity keeps the timestamps of its admitted requests. A request is
admitted while fewer than `max_requests` timestamps fall inside the trailing
window; rejected attempts are not recorded.

The same class backs two instances:
- the service-side limiter, keyed by client IP, in memory and authoritative;
- the caller-side limiter, keyed by local session, advisory only and
  persisted best-effort so its count survives CLI invocations.
"""
import json
import logging
import threading
import time
from typing import Callable, Optional

from remarkdeck.core.storage import SlotStore

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Admit at most `max_requests` per identity in any `window_seconds` span."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
        store: Optional[SlotStore] = None,
        slot: Optional[str] = None,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if store is not None and not slot:
            raise ValueError("A slot name is required when a store is given")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._store = store
        self._slot = slot
        self._lock = threading.Lock()
        self._history: dict[str, list[float]] = self._load()
        self._last_sweep = self._clock()

    def check_limit(self, identity: str) -> bool:
        """Record and admit a request for `identity`, or reject it once quota is spent."""
        with self._lock:
            now = self._clock()
            self._sweep(now)
            recent = self._prune(identity, now)
            if len(recent) >= self.max_requests:
                return False
            recent.append(now)
            self._history[identity] = recent
            self._save()
            return True

    def get_remaining(self, identity: str) -> int:
        """Admissions left for `identity` in the current window, never negative."""
        with self._lock:
            recent = self._prune(identity, self._clock())
            return max(0, self.max_requests - len(recent))

    def reset(self, identity: Optional[str] = None) -> None:
        """Forget the history of one identity, or of all of them."""
        with self._lock:
            if identity is None:
                self._history.clear()
            else:
                self._history.pop(identity, None)
            self._save()

    def _prune(self, identity: str, now: float) -> list[float]:
        cutoff = now - self.window_seconds
        recent = [t for t in self._history.get(identity, []) if t > cutoff]
        if recent:
            self._history[identity] = recent
        else:
            self._history.pop(identity, None)
        return recent

    def _sweep(self, now: float) -> None:
        """Drop identities with no timestamps left in the window, at most once per window."""
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        cutoff = now - self.window_seconds
        expired = [
            identity for identity, stamps in self._history.items()
            if not any(t > cutoff for t in stamps)
        ]
        for identity in expired:
            del self._history[identity]

    def _load(self) -> dict[str, list[float]]:
        if self._store is None:
            return {}
        try:
            raw = self._store.read(self._slot)
            if raw is None:
                return {}
            data = json.loads(raw)
            return {
                str(identity): [float(t) for t in stamps]
                for identity, stamps in data.items()
            }
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to load rate limit history, starting fresh: {e}")
            return {}

    def _save(self) -> None:
        if self._store is None:
            return
        try:
            self._store.write(self._slot, json.dumps(self._history))
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to save rate limit history: {e}")
