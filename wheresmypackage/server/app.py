"""FastAPI app creation, settings, and per-request session helpers."""

import logging
from typing import Optional

from fastapi import FastAPI, Request

from ..client import TrackingClient
from ..config import Settings, load_settings
from ..narrator import LoadingNarrator
from ..resume import SessionLocation
from ..session import TrackingSession

logger = logging.getLogger(__name__)

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Lazy-load settings on first call."""
    global _settings
    if _settings is None:
        _settings = load_settings()
        logger.info(f"Tracking service: {_settings.api_base}")
    return _settings


def set_settings(new_settings: Optional[Settings]):
    """Replace the global settings (None forces a reload on next access)."""
    global _settings
    _settings = new_settings


def get_tracking_client() -> TrackingClient:
    settings = get_settings()
    return TrackingClient(api_base=settings.api_base, timeout=settings.timeout)


def new_session(client: TrackingClient, request: Request) -> TrackingSession:
    """Build a session whose location mirrors the incoming request URL."""
    settings = get_settings()
    location = SessionLocation(path=request.url.path, query=request.url.query)
    narrator = LoadingNarrator(
        messages=settings.loading_messages,
        interval=settings.narrator_interval,
        on_message=lambda m: logger.debug(f"Loading: {m}"),
    )
    return TrackingSession(client, carriers=settings.carriers, location=location, narrator=narrator)


# --- FastAPI app creation (after all helpers are defined to avoid circular imports) ---

def _create_api() -> FastAPI:
    """Create and configure the FastAPI app with routes."""
    _api = FastAPI(title="Where's My Package", version="0.1.0")

    from .routes import register_routes
    register_routes(_api)
    return _api


api = _create_api()
