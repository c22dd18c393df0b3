"""Deck compiler: structured decks to remark.js Markdown."""

from .markdown import (
    RenderedDeck,
    compile_deck,
    render_deck,
    strip_property_lines,
)

__all__ = [
    "RenderedDeck",
    "compile_deck",
    "render_deck",
    "strip_property_lines",
]
