"""
Deck Generation Service

Asks an Azure OpenAI deployment for a complete deck, using Microsoft Agent
Framework structured output so the reply parses straight into a `Deck`.
"""
import logging
from typing import Optional

from agent_framework import ChatMessage, Role
from agent_framework.azure import AzureOpenAIChatClient
from azure.identity import DefaultAzureCredential
from pydantic import ValidationError

from remarkdeck.core import get_settings
from remarkdeck.models.deck import Deck

from .exceptions import GenerationFailedError, GenerationUnavailableError
from .prompts import DECK_AGENT_INSTRUCTIONS, build_user_prompt

logger = logging.getLogger(__name__)


class DeckGenerationService:
    """Generates structured decks from free-text topics."""

    def __init__(self):
        self._settings = get_settings()
        self._chat_client: Optional[AzureOpenAIChatClient] = None
        self._deck_agent = None

    @property
    def is_available(self) -> bool:
        return self._settings.has_azure_openai

    def _ensure_client(self) -> None:
        """Create the chat client and agent on first use."""
        if self._chat_client is not None:
            return
        if not self.is_available:
            raise GenerationUnavailableError("Deck generation service temporarily unavailable")

        if self._settings.azure_openai_api_key:
            auth = {"api_key": self._settings.azure_openai_api_key}
        else:
            auth = {"credential": DefaultAzureCredential()}

        self._chat_client = AzureOpenAIChatClient(
            endpoint=self._settings.azure_openai_endpoint or "",
            deployment_name=self._settings.azure_openai_deployment,
            api_version=self._settings.azure_openai_api_version,
            **auth,
        )
        self._deck_agent = self._chat_client.create_agent(
            name="DeckAgent",
            instructions=DECK_AGENT_INSTRUCTIONS,
        )

    async def generate(self, topic: str) -> Deck:
        """
        Generate a deck for a topic.

        Args:
            topic: Validated, moderated topic text

        Returns:
            The generated deck

        Raises:
            GenerationUnavailableError: If no deployment is configured
            GenerationFailedError: If the model call fails or returns no deck
        """
        self._ensure_client()

        try:
            response = await self._deck_agent.run(
                [ChatMessage(role=Role.USER, text=build_user_prompt(topic))],
                response_format=Deck,
            )
        except ValidationError as e:
            logger.error(f"Generated deck did not match the schema: {e}")
            raise GenerationFailedError("The generated deck was malformed", cause=e) from e
        except Exception as e:
            logger.error(f"Deck generation failed: {e}")
            raise GenerationFailedError(f"Deck generation failed: {e}", cause=e) from e

        deck = response.value
        if not isinstance(deck, Deck):
            logger.error("Deck generation returned no structured output")
            raise GenerationFailedError("Deck generation did not complete")
        return deck


_deck_generation_service: Optional[DeckGenerationService] = None


def get_deck_generation_service() -> DeckGenerationService:
    """Get the singleton deck generation service instance."""
    global _deck_generation_service
    if _deck_generation_service is None:
        _deck_generation_service = DeckGenerationService()
    return _deck_generation_service
