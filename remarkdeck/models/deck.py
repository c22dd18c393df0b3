"""Deck-related Pydantic models.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the generation model produces and the persisted cache layout.
"""
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ClassName = Annotated[str, Field(min_length=1)]


class DeckBaseModel(BaseModel):
    """Immutable, strict base with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def to_wire(self) -> dict:
        """Dump to a JSON-compatible dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class SlideProperties(DeckBaseModel):
    """Slide properties that become the leading `key: value` lines of a slide."""

    name: Optional[str] = Field(
        default=None, min_length=1, description="Identifier used for templates and links"
    )
    classes: list[ClassName] = Field(
        default_factory=list, description="CSS classes, rendered as a comma-separated `class:` line"
    )
    layout: bool = Field(
        default=False, description="Layout slide: a template for following slides, not shown itself"
    )
    template: Optional[str] = Field(
        default=None, min_length=1, description="Name of another slide to inherit from"
    )
    count: bool = Field(default=True, description="Include the slide in the slide counter")
    exclude: bool = Field(default=False, description="Suppress the slide entirely")
    background_image_url: Optional[str] = Field(
        default=None, description="Background image URL, rendered as `background-image: url(...)`"
    )

    @property
    def is_default(self) -> bool:
        """True when no property deviates from its default."""
        return self == SlideProperties()


class Slide(DeckBaseModel):
    """A single slide."""

    content: str = Field(default="", description="Markdown body shown on the slide")
    notes: Optional[str] = Field(
        default=None, description="Speaker notes, rendered after a `???` marker"
    )
    properties: SlideProperties = Field(default_factory=SlideProperties)
    incremental_from_previous: bool = Field(
        default=False,
        description="Continue the previous slide with the `--` separator instead of starting a new one",
    )


class Deck(DeckBaseModel):
    """The whole deck: global stylesheet plus ordered slides."""

    css: str = Field(default="", description="Global CSS injected next to the slideshow")
    slides: list[Slide] = Field(..., min_length=1, description="Slides in presentation order")

    @property
    def visible_slides(self) -> list[Slide]:
        """Slides that are not excluded, in presentation order."""
        return [slide for slide in self.slides if not slide.properties.exclude]


class CachedDeck(DeckBaseModel):
    """One persisted cache entry."""

    input: str = Field(..., description="Exact input text the deck was generated from")
    deck: Deck
    timestamp: int = Field(..., description="Insertion time in epoch milliseconds")
