"""Bounded result cache of generated decks."""

from .service import DeckCache, DEFAULT_MAX_ENTRIES

__all__ = [
    "DeckCache",
    "DEFAULT_MAX_ENTRIES",
]
