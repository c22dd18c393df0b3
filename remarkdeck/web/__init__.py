"""Presentation page rendering for the remark.js front end."""
import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from remarkdeck.models.deck import Deck
from remarkdeck.services.compiler import RenderedDeck

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEMO_DECK_PATH = Path(__file__).parent / "demo_deck.json"

_environment = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def stylesheet(css: str) -> Markup:
    """Mark deck CSS safe for a <style> element without letting it close the element."""
    return Markup(css.replace("</", "<\\/"))


_environment.filters["stylesheet"] = stylesheet


def presentation_context(rendered: RenderedDeck, title: str, script_url: str) -> dict:
    """Template variables shared by the web route and standalone HTML export."""
    return {
        "title": title,
        "markdown": rendered.markdown,
        "css": rendered.css,
        "remark_script_url": script_url,
    }


def render_presentation_html(rendered: RenderedDeck, title: str, script_url: str) -> str:
    """Render a standalone HTML page presenting the deck with remark.js."""
    template = _environment.get_template("slides.html")
    return template.render(**presentation_context(rendered, title, script_url))


def load_demo_deck() -> Deck:
    """Load the bundled demo deck."""
    return Deck.model_validate(json.loads(DEMO_DECK_PATH.read_text(encoding="utf-8")))
