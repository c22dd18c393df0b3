"""API routes for RemarkDeck."""

from .routes import pages, slides

__all__ = [
    "pages",
    "slides",
]
