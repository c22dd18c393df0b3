"""
Pytest configuration and fixtures.
"""
import pytest

from remarkdeck.core.storage import MemoryStore
from remarkdeck.models.deck import Deck, Slide, SlideProperties


@pytest.fixture
def clean_environment(monkeypatch):
    """Provide a clean environment for tests."""
    env_vars = [
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_ENDPOINT",
        "AZURE_OPENAI_DEPLOYMENT",
        "OPENAI_API_KEY",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def memory_store():
    """An in-memory slot store."""
    return MemoryStore()


@pytest.fixture
def make_deck():
    """Factory building a deck of default slides with the given bodies."""
    def _make(*contents: str, css: str = "") -> Deck:
        return Deck(css=css, slides=[Slide(content=c) for c in contents])
    return _make


@pytest.fixture
def sample_deck():
    """A small deck exercising properties, notes and separators."""
    return Deck(
        css="h1 { color: teal; }",
        slides=[
            Slide(
                content="# Welcome",
                notes="Say hello",
                properties=SlideProperties(name="intro", classes=["center", "middle"]),
            ),
            Slide(content="- first point"),
            Slide(content="- second point", incremental_from_previous=True),
        ],
    )
