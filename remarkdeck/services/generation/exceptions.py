"""Errors raised along the deck generation path."""
from typing import Optional


class SlideGenerationError(Exception):
    """Base class for generation path errors."""


class RateLimitExceededError(SlideGenerationError):
    """The caller's quota for the current window is spent."""

    def __init__(self, remaining: int = 0, message: str = "Rate limit exceeded. Please try again later."):
        super().__init__(message)
        self.remaining = remaining


class InputValidationError(SlideGenerationError):
    """The topic text is missing, blank or too long."""


class ContentFlaggedError(SlideGenerationError):
    """The moderation endpoint flagged the topic text."""

    def __init__(self, categories: list[str]):
        self.categories = categories
        super().__init__(f"Content flagged as inappropriate: {', '.join(categories)}")


class GenerationUnavailableError(SlideGenerationError):
    """No language model is configured."""


class GenerationFailedError(SlideGenerationError):
    """The language model call failed or returned no usable deck."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
