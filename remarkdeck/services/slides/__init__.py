"""Server-side slide request handling."""

from .service import GenerationResult, SlideRequestService, get_slide_request_service

__all__ = [
    "GenerationResult",
    "SlideRequestService",
    "get_slide_request_service",
]
