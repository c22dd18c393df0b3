"""
Deck Compiler

Compiles a structured Deck into the Markdown dialect remark.js parses:

    name: intro
    class: center, middle

    # Slide body

    ???
    Speaker notes

    ---

Property lines come first, then a blank line and the body, then optional
notes after a `???` marker. Slides are joined with `---`, or with `--` when
the next slide continues the previous one incrementally.
"""
import logging
import re
from dataclasses import dataclass

from remarkdeck.models.deck import Deck, Slide, SlideProperties

logger = logging.getLogger(__name__)

SLIDE_SEPARATOR = "\n---\n\n"
INCREMENTAL_SEPARATOR = "\n--\n\n"
NOTES_MARKER = "???"

_CLASS_LINE_PATTERN = re.compile(r"^class:\s*[^\n]+\n?", re.MULTILINE)
_LEADING_NEWLINES_PATTERN = re.compile(r"^\n+")


@dataclass(frozen=True)
class RenderedDeck:
    """The output pair handed to the slideshow renderer."""

    markdown: str
    css: str


def compile_deck(deck: Deck) -> str:
    """
    Compile a deck to remark Markdown.

    Pure and deterministic. Excluded slides are dropped before separators are
    chosen, so a slide's separator depends on the next *visible* slide.

    Raises:
        ValueError: If the deck has no slides (caller bug).
    """
    if not deck.slides:
        logger.error("Refusing to compile a deck with no slides")
        raise ValueError("Deck must contain at least one slide")

    visible = deck.visible_slides
    blocks = []
    for index, slide in enumerate(visible):
        block = _compile_slide(slide)
        if index + 1 < len(visible):
            block += _separator_before(visible[index + 1])
        blocks.append(block)
    return "".join(blocks)


def render_deck(deck: Deck) -> RenderedDeck:
    """Clean slide bodies and compile; returns Markdown plus the deck CSS."""
    cleaned = deck.model_copy(
        update={
            "slides": [
                slide.model_copy(update={"content": strip_property_lines(slide.content)})
                for slide in deck.slides
            ]
        }
    )
    return RenderedDeck(markdown=compile_deck(cleaned), css=deck.css)


def strip_property_lines(content: str) -> str:
    """
    Remove `class:` lines and leading blank lines from a slide body.

    Generated bodies sometimes repeat the slide's own property syntax. Left in
    place, remark would read them as a second property block.
    """
    cleaned = _CLASS_LINE_PATTERN.sub("", content)
    return _LEADING_NEWLINES_PATTERN.sub("", cleaned)


def _compile_slide(slide: Slide) -> str:
    text = "".join(f"{key}: {value}\n" for key, value in _property_lines(slide.properties))
    text += f"\n{slide.content}\n"
    if slide.notes:
        text += f"\n{NOTES_MARKER}\n{slide.notes}\n"
    return text


def _property_lines(properties: SlideProperties) -> list[tuple[str, str]]:
    """Non-default properties in the fixed order remark expects."""
    lines = []
    if properties.name:
        lines.append(("name", properties.name))
    if properties.classes:
        lines.append(("class", ", ".join(properties.classes)))
    if properties.background_image_url:
        lines.append(("background-image", f"url({properties.background_image_url})"))
    if not properties.count:
        lines.append(("count", "false"))
    if properties.layout:
        lines.append(("layout", "true"))
    if properties.template:
        lines.append(("template", properties.template))
    return lines


def _separator_before(next_slide: Slide) -> str:
    if next_slide.incremental_from_previous:
        return INCREMENTAL_SEPARATOR
    return SLIDE_SEPARATOR
