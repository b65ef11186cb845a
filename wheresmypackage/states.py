"""
Session states - explicit tagged union for the tracking workflow

Each state carries exactly the data that is valid in it, so "tracking
without data" or "loading without a request" cannot be represented.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from .models import LookupRequest, TrackingData


class SessionStatus(str, Enum):
    """Workflow state of a tracking session"""
    IDLE = "idle"
    LOADING = "loading"
    TRACKING = "tracking"
    ERROR = "error"


STATE_TRANSITIONS = {
    SessionStatus.IDLE: [
        SessionStatus.LOADING,
    ],
    SessionStatus.LOADING: [
        SessionStatus.LOADING,  # superseded by a newer submit
        SessionStatus.TRACKING,
        SessionStatus.ERROR,
        SessionStatus.IDLE,
    ],
    SessionStatus.TRACKING: [
        SessionStatus.LOADING,
        SessionStatus.IDLE,
    ],
    SessionStatus.ERROR: [
        SessionStatus.LOADING,
        SessionStatus.IDLE,
    ],
}


def can_transition(from_status: SessionStatus, to_status: SessionStatus) -> bool:
    return to_status in STATE_TRANSITIONS.get(from_status, [])


@dataclass(frozen=True)
class Idle:
    status = SessionStatus.IDLE

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value}


@dataclass(frozen=True)
class Loading:
    request: LookupRequest
    lookup_id: int = 0
    status = SessionStatus.LOADING

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value, "request": self.request.to_dict()}


@dataclass(frozen=True)
class Tracking:
    request: LookupRequest
    data: TrackingData
    status = SessionStatus.TRACKING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "request": self.request.to_dict(),
            "data": self.data.to_dict(),
        }


@dataclass(frozen=True)
class Failed:
    """Lookup failed; ``message`` is safe to show to the user."""
    request: LookupRequest
    error_type: str
    message: str
    status = SessionStatus.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "request": self.request.to_dict(),
            "error_type": self.error_type,
            "error_message": self.message,
        }


SessionState = Union[Idle, Loading, Tracking, Failed]


def request_of(state: SessionState) -> Optional[LookupRequest]:
    return getattr(state, "request", None)
