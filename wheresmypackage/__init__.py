"""
Where's My Package - shipment tracking workflow

Usage:
    from wheresmypackage import TrackingClient, TrackingSession

    session = TrackingSession(TrackingClient("https://track.example.com"))
    state = await session.submit("ABC123", "4px")
"""

from .carriers import CarrierRegistry, DEFAULT_CARRIERS
from .client import TrackingClient
from .config import Settings, load_settings
from .errors import NotFoundError, TrackingError, TransportError, ValidationError
from .formatting import StatusSeverity, classify_status, format_timestamp
from .models import Carrier, Country, LookupRequest, TrackingData, TransitEvent
from .narrator import LoadingNarrator
from .resume import LookupCodec, SessionLocation
from .session import TrackingSession
from .states import Failed, Idle, Loading, SessionState, SessionStatus, Tracking
from .timeline import build_timeline, event_rank, group_events, sort_events

__version__ = "0.1.0"

__all__ = [
    # Session
    "TrackingSession",
    "SessionState",
    "SessionStatus",
    "Idle",
    "Loading",
    "Tracking",
    "Failed",
    # Service
    "TrackingClient",
    "LookupCodec",
    "SessionLocation",
    "LoadingNarrator",
    # Models
    "Carrier",
    "CarrierRegistry",
    "DEFAULT_CARRIERS",
    "Country",
    "LookupRequest",
    "TrackingData",
    "TransitEvent",
    # Display
    "StatusSeverity",
    "classify_status",
    "format_timestamp",
    "build_timeline",
    "event_rank",
    "group_events",
    "sort_events",
    # Config
    "Settings",
    "load_settings",
    # Errors
    "TrackingError",
    "ValidationError",
    "TransportError",
    "NotFoundError",
]
