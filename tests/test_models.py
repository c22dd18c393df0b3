"""
Unit tests for Pydantic models.
"""
import pytest
from pydantic import ValidationError

from remarkdeck.models.deck import CachedDeck, Deck, Slide, SlideProperties


class TestSlideProperties:
    """Tests for SlideProperties model."""

    def test_default_values(self):
        """Test default values are set correctly."""
        props = SlideProperties()

        assert props.name is None
        assert props.classes == []
        assert props.layout is False
        assert props.template is None
        assert props.count is True
        assert props.exclude is False
        assert props.background_image_url is None
        assert props.is_default is True

    def test_camel_case_aliases(self):
        """Test wire names are accepted and produced."""
        props = SlideProperties.model_validate({"backgroundImageUrl": "bg.png", "classes": ["a", "a"]})

        assert props.background_image_url == "bg.png"
        assert props.classes == ["a", "a"]
        assert props.is_default is False
        assert props.to_wire()["backgroundImageUrl"] == "bg.png"

    def test_unknown_fields_rejected(self):
        """Test strict schema rejects extra keys."""
        with pytest.raises(ValidationError):
            SlideProperties.model_validate({"colour": "red"})

    def test_empty_name_rejected(self):
        """Test names must not be empty strings."""
        with pytest.raises(ValidationError):
            SlideProperties(name="")


class TestSlide:
    """Tests for Slide model."""

    def test_defaults(self):
        """Test slide defaults."""
        slide = Slide()

        assert slide.content == ""
        assert slide.notes is None
        assert slide.properties == SlideProperties()
        assert slide.incremental_from_previous is False

    def test_from_wire(self):
        """Test parsing the generation model's JSON shape."""
        slide = Slide.model_validate({
            "content": "# Hi",
            "notes": None,
            "properties": {
                "name": None,
                "classes": [],
                "layout": False,
                "template": None,
                "count": True,
                "exclude": False,
                "backgroundImageUrl": None,
            },
            "incrementalFromPrevious": True,
        })

        assert slide.content == "# Hi"
        assert slide.incremental_from_previous is True


class TestDeck:
    """Tests for Deck model."""

    def test_requires_slides(self):
        """Test a deck must have at least one slide."""
        with pytest.raises(ValidationError):
            Deck(slides=[])

        with pytest.raises(ValidationError):
            Deck.model_validate({"css": ""})

    def test_is_immutable(self, sample_deck):
        """Test decks cannot be mutated once built."""
        with pytest.raises(ValidationError):
            sample_deck.css = "changed"

    def test_visible_slides(self):
        """Test excluded slides are filtered out."""
        deck = Deck(slides=[
            Slide(content="a"),
            Slide(content="b", properties=SlideProperties(exclude=True)),
            Slide(content="c"),
        ])

        assert [s.content for s in deck.visible_slides] == ["a", "c"]

    def test_wire_round_trip(self, sample_deck):
        """Test the camelCase dump parses back to an equal deck."""
        wire = sample_deck.to_wire()

        assert "incrementalFromPrevious" in wire["slides"][0]
        assert Deck.model_validate(wire) == sample_deck


class TestCachedDeck:
    """Tests for CachedDeck model."""

    def test_persisted_layout(self, sample_deck):
        """Test cache entries serialize to input/deck/timestamp."""
        entry = CachedDeck(input="tea", deck=sample_deck, timestamp=1700000000000)

        assert set(entry.to_wire()) == {"input", "deck", "timestamp"}
