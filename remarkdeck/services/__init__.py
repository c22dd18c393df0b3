"""Service layer for RemarkDeck."""

from .cache import DeckCache
from .compiler import RenderedDeck, compile_deck, render_deck
from .rate_limit import SlidingWindowRateLimiter
from .slides import SlideRequestService, get_slide_request_service

__all__ = [
    "DeckCache",
    "RenderedDeck",
    "compile_deck",
    "render_deck",
    "SlidingWindowRateLimiter",
    "SlideRequestService",
    "get_slide_request_service",
]
