"""Presentation pages."""
import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from remarkdeck.core import get_settings
from remarkdeck.models.deck import Deck
from remarkdeck.services import render_deck
from remarkdeck.web import load_demo_deck, render_presentation_html

logger = logging.getLogger(__name__)
router = APIRouter(tags=["pages"])


def _presentation(deck: Deck, title: str) -> HTMLResponse:
    settings = get_settings()
    html = render_presentation_html(render_deck(deck), title, settings.remark_script_url)
    return HTMLResponse(html)


@router.post("/slides", response_class=HTMLResponse)
async def present_deck(deck: Deck):
    """Present a deck with remark.js."""
    return _presentation(deck, get_settings().app_name)


@router.get("/slides/demo", response_class=HTMLResponse)
async def present_demo():
    """Present the bundled demo deck."""
    return _presentation(load_demo_deck(), f"{get_settings().app_name} Demo")
