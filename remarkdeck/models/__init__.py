"""Data models for RemarkDeck."""

from .deck import CachedDeck, Deck, Slide, SlideProperties

__all__ = [
    "CachedDeck",
    "Deck",
    "Slide",
    "SlideProperties",
]
