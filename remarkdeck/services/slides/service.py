"""
Slide Request Service

The authoritative side of the request governor. A request is admitted by the
service-side rate limiter, validated, moderated and only then handed to the
deck generation service.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from remarkdeck.core import get_settings
from remarkdeck.models.deck import Deck
from remarkdeck.services.generation import (
    ContentFlaggedError,
    ContentModerator,
    DeckGenerationService,
    InputValidationError,
    RateLimitExceededError,
    get_content_moderator,
    get_deck_generation_service,
    validate_text,
)
from remarkdeck.services.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    deck: Deck
    original_input: str
    remaining_requests: int


class SlideRequestService:
    """Rate-limited deck generation for network callers."""

    def __init__(
        self,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        moderator: Optional[ContentModerator] = None,
        generator: Optional[DeckGenerationService] = None,
    ):
        self._settings = get_settings()
        self._rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            max_requests=self._settings.rate_limit_max_requests,
            window_seconds=self._settings.rate_limit_window_seconds,
        )
        self._moderator = moderator or get_content_moderator()
        self._generator = generator or get_deck_generation_service()

    @property
    def is_available(self) -> bool:
        return self._generator.is_available

    def remaining(self, identity: str) -> int:
        """Requests `identity` may still make in the current window."""
        return self._rate_limiter.get_remaining(identity)

    async def generate(self, identity: str, text: object) -> GenerationResult:
        """
        Generate a deck on behalf of `identity`.

        Raises:
            RateLimitExceededError: Quota for the window is spent
            InputValidationError: Text is not a non-blank string within limits
            ContentFlaggedError: Moderation flagged the text
            GenerationUnavailableError: No language model configured
            GenerationFailedError: Moderation or generation call failed
        """
        if not self._rate_limiter.check_limit(identity):
            logger.warning(f"Rate limit exceeded for {identity}")
            raise RateLimitExceededError(remaining=0)

        validation = validate_text(text, self._settings.max_input_length)
        if not validation.is_valid:
            raise InputValidationError(validation.error)

        flagged = await self._moderator.check(text)
        if flagged:
            raise ContentFlaggedError(flagged)

        deck = await self._generator.generate(text)
        return GenerationResult(
            deck=deck,
            original_input=text,
            remaining_requests=self._rate_limiter.get_remaining(identity),
        )


_slide_request_service: Optional[SlideRequestService] = None


def get_slide_request_service() -> SlideRequestService:
    """Get the singleton slide request service instance."""
    global _slide_request_service
    if _slide_request_service is None:
        _slide_request_service = SlideRequestService()
    return _slide_request_service
