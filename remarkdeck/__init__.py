"""
RemarkDeck

Turns a free-text topic into an AI-generated remark.js slideshow, with a
rate-limited generation API and a bounded local cache of previous decks.
"""

__version__ = "1.0.0"
__author__ = "RemarkDeck Team"
