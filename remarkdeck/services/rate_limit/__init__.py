"""Sliding-window rate limiting for deck generation."""

from .limiter import SlidingWindowRateLimiter

__all__ = [
    "SlidingWindowRateLimiter",
]
