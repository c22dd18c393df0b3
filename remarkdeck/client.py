"""
Deck Client

Caller side of the request governor. Repeat topics are answered from the
local result cache without touching the network or the quota; new topics go
through the advisory rate limiter and then to the generation API, whose own
limiter is the one that actually decides.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError

from remarkdeck.core import Settings, get_settings
from remarkdeck.core.storage import JsonFileStore, SlotStore
from remarkdeck.models.deck import Deck
from remarkdeck.services.cache import DeckCache
from remarkdeck.services.generation import RateLimitExceededError
from remarkdeck.services.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/slides/generate"
LOCAL_IDENTITY = "local"


class DeckClientError(Exception):
    """The generation API could not produce a deck."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class FetchResult:
    deck: Deck
    from_cache: bool
    remaining_requests: int


class DeckClient:
    """Fetches decks from the generation API with local caching and quota."""

    def __init__(
        self,
        base_url: str,
        cache: DeckCache,
        rate_limiter: SlidingWindowRateLimiter,
        identity: str = LOCAL_IDENTITY,
        timeout: float = 180,
    ):
        self._base_url = base_url.rstrip("/")
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._identity = identity
        self._timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        store: Optional[SlotStore] = None,
    ) -> "DeckClient":
        """Build a client whose cache and quota persist in the data directory."""
        settings = settings or get_settings()
        store = store or JsonFileStore(settings.storage_dir)
        cache = DeckCache(
            store=store,
            slot=settings.cache_slot,
            max_entries=settings.cache_max_entries,
        )
        rate_limiter = SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            store=store,
            slot=settings.client_rate_limit_slot,
        )
        return cls(settings.api_base_url, cache, rate_limiter, timeout=settings.request_timeout)

    @property
    def cache(self) -> DeckCache:
        return self._cache

    def remaining(self) -> int:
        """Advisory count of generation requests left in the current window."""
        return self._rate_limiter.get_remaining(self._identity)

    async def fetch_deck(self, text: str) -> FetchResult:
        """
        Get a deck for a topic, from the cache when possible.

        Raises:
            DeckClientError: Blank input or an API/network failure
            RateLimitExceededError: The local advisory quota is spent, or the
                API rejected the request for rate limiting
        """
        if not text or not text.strip():
            raise DeckClientError("Please enter some text to generate slides from")

        cached = self._cache.get(text)
        if cached is not None:
            return FetchResult(deck=cached, from_cache=True, remaining_requests=self.remaining())

        if not self._rate_limiter.check_limit(self._identity):
            logger.warning("Local rate limit exceeded, not contacting the generation API")
            raise RateLimitExceededError(remaining=0)

        status, data = await self._post(text)
        if status == 429:
            logger.warning("Generation API rejected the request: rate limit exceeded")
            raise RateLimitExceededError(remaining=int(data.get("remainingRequests", 0)))
        if status != 200:
            message = data.get("error") or "Failed to fetch slides"
            logger.error(f"Generation API returned {status}: {message}")
            raise DeckClientError(message, status=status)

        try:
            deck = Deck.model_validate(data.get("response"))
        except ValidationError as e:
            logger.error(f"Generation API returned a malformed deck: {e}")
            raise DeckClientError("The generated deck was malformed", status=status) from e

        self._cache.put(text, deck)
        remaining = data.get("remainingRequests")
        return FetchResult(
            deck=deck,
            from_cache=False,
            remaining_requests=int(remaining) if remaining is not None else self.remaining(),
        )

    async def _post(self, text: str) -> tuple[int, dict[str, Any]]:
        """POST the topic to the generation API; returns status and JSON body."""
        url = f"{self._base_url}{GENERATE_PATH}"
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json={"input": text}) as resp:
                    try:
                        body = await resp.json(content_type=None)
                    except ValueError:
                        body = None
                    return resp.status, body if isinstance(body, dict) else {}
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Generation API unreachable at {url}: {e}")
            raise DeckClientError(f"Generation API unreachable: {e}") from e
