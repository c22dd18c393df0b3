"""Deck generation: validation, moderation and the language model call."""

from .exceptions import (
    ContentFlaggedError,
    GenerationFailedError,
    GenerationUnavailableError,
    InputValidationError,
    RateLimitExceededError,
    SlideGenerationError,
)
from .moderation import ContentModerator, get_content_moderator
from .service import DeckGenerationService, get_deck_generation_service
from .validation import ValidationResult, validate_text

__all__ = [
    "ContentFlaggedError",
    "ContentModerator",
    "DeckGenerationService",
    "GenerationFailedError",
    "GenerationUnavailableError",
    "InputValidationError",
    "RateLimitExceededError",
    "SlideGenerationError",
    "ValidationResult",
    "get_content_moderator",
    "get_deck_generation_service",
    "validate_text",
]
