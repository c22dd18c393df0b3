"""Content moderation for deck topics via the OpenAI moderation endpoint."""
import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from remarkdeck.core import get_settings

from .exceptions import GenerationFailedError

logger = logging.getLogger(__name__)


class ContentModerator:
    """Flags topic text the moderation model considers inappropriate."""

    def __init__(self):
        self._settings = get_settings()
        self._client: Optional[AsyncOpenAI] = None
        self._skip_logged = False

    @property
    def is_available(self) -> bool:
        return self._settings.has_moderation

    def _ensure_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._settings.openai_api_key)
        return self._client

    async def check(self, text: str) -> list[str]:
        """
        Moderate a topic.

        Returns:
            Names of the flagged categories; empty when the text is acceptable
            or moderation is not configured.
        """
        if not self.is_available:
            if not self._skip_logged:
                logger.info("OPENAI_API_KEY not set, skipping content moderation")
                self._skip_logged = True
            return []

        try:
            response = await self._ensure_client().moderations.create(
                model=self._settings.moderation_model,
                input=text,
            )
        except OpenAIError as e:
            logger.error(f"Moderation request failed: {e}")
            raise GenerationFailedError("Content moderation is temporarily unavailable", cause=e) from e

        result = response.results[0]
        if not result.flagged:
            return []
        categories = result.categories.model_dump(by_alias=True)
        return [name for name, flagged in categories.items() if flagged]


_moderator: Optional[ContentModerator] = None


def get_content_moderator() -> ContentModerator:
    """Get the singleton content moderator."""
    global _moderator
    if _moderator is None:
        _moderator = ContentModerator()
    return _moderator
