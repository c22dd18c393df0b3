"""Slide generation and rendering API endpoints."""
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from remarkdeck.models.deck import Deck
from remarkdeck.services import get_slide_request_service, render_deck
from remarkdeck.services.generation import (
    ContentFlaggedError,
    GenerationFailedError,
    GenerationUnavailableError,
    InputValidationError,
    RateLimitExceededError,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/slides", tags=["slides"])


def client_identity(request: Request) -> str:
    """Identify the caller for rate limiting by network address."""
    forwarded = request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip")
    if forwarded:
        return forwarded.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


@router.post("/generate")
async def generate_slides(request: Request):
    """
    Generate a deck from a free-text topic.

    Body: {"input": "<topic>"}

    Returns the deck, the original input and the caller's remaining quota.
    Rate limiting happens before validation so every attempt counts.
    """
    service = get_slide_request_service()
    identity = client_identity(request)

    try:
        payload = await request.json()
    except ValueError:
        return _error(400, "Request body must be JSON")
    text = payload.get("input") if isinstance(payload, dict) else None

    try:
        result = await service.generate(identity, text)
    except RateLimitExceededError as e:
        return _error(429, str(e), remainingRequests=e.remaining)
    except (InputValidationError, ContentFlaggedError) as e:
        return _error(400, str(e))
    except GenerationUnavailableError as e:
        return _error(503, str(e))
    except GenerationFailedError as e:
        return _error(502, str(e))

    return {
        "response": result.deck.to_wire(),
        "originalInput": result.original_input,
        "remainingRequests": result.remaining_requests,
    }


@router.get("/remaining")
async def get_remaining(request: Request) -> dict[str, Any]:
    """Report how many generation requests the caller has left."""
    service = get_slide_request_service()
    return {"remainingRequests": service.remaining(client_identity(request))}


@router.post("/render")
async def render_slides(deck: Deck) -> dict[str, Any]:
    """Compile a deck to remark Markdown plus its stylesheet."""
    rendered = render_deck(deck)
    return {"markdown": rendered.markdown, "css": rendered.css}
