"""
Where's My Package Models - Shipment data returned by the tracking service

All models are immutable. ``TrackingData.from_dict`` accepts the camelCase
``data`` payload of the tracking service and raises ``ValueError`` when a
required field is missing or has the wrong type.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .constants import UNKNOWN_LOCATION


def _require(data: Dict[str, Any], key: str, kind: type) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"Missing field: {key}")
    value = data[key]
    # bool is an int subclass; a flag is never a valid count or timestamp
    if kind in (int, float) and isinstance(value, bool):
        raise ValueError(f"Field '{key}' must be a number")
    if kind is float:
        if not isinstance(value, (int, float)):
            raise ValueError(f"Field '{key}' must be a number")
        return value
    if not isinstance(value, kind):
        raise ValueError(f"Field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Country:
    """Origin or destination country of a shipment."""

    name: str
    code: str  # ISO-3166 alpha-2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Country":
        code = _require(data, "code", str).strip()
        if len(code) != 2 or not code.isalpha():
            raise ValueError(f"Invalid country code: {code!r}")
        return cls(name=_require(data, "name", str), code=code.upper())

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "code": self.code}


@dataclass(frozen=True)
class TransitEvent:
    """One timestamped milestone in a shipment's journey."""

    description: str
    location: str
    timestamp: int  # epoch milliseconds

    @property
    def is_unknown_location(self) -> bool:
        return self.location == UNKNOWN_LOCATION

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransitEvent":
        return cls(
            description=_require(data, "description", str),
            location=_require(data, "location", str),
            timestamp=int(_require(data, "timestamp", float)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "location": self.location,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class TrackingData:
    """
    One successful tracking-service response.

    Attributes:
        current_status: Short status label (e.g. "In Transit", "Delayed")
        current_status_description: Longer human-readable status
        origin: Country the shipment left from
        destination: Country the shipment is headed to
        days_in_transit: Whole days since the first scan
        transit_events: Events in the order the service sent them
    """

    current_status: str
    current_status_description: str
    origin: Country
    destination: Country
    days_in_transit: int
    transit_events: Tuple[TransitEvent, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackingData":
        """Parse the tracking service's ``data`` object."""
        days = _require(data, "daysInTransit", int)
        if days < 0:
            raise ValueError(f"daysInTransit must be >= 0, got {days}")
        events = _require(data, "transitEvents", list)
        return cls(
            current_status=_require(data, "currentStatus", str),
            current_status_description=_require(data, "currentStatusDescription", str),
            origin=Country.from_dict(_require(data, "origin", dict)),
            destination=Country.from_dict(_require(data, "destination", dict)),
            days_in_transit=days,
            transit_events=tuple(TransitEvent.from_dict(e) for e in events),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentStatus": self.current_status,
            "currentStatusDescription": self.current_status_description,
            "origin": self.origin.to_dict(),
            "destination": self.destination.to_dict(),
            "daysInTransit": self.days_in_transit,
            "transitEvents": [e.to_dict() for e in self.transit_events],
        }


@dataclass(frozen=True)
class LookupRequest:
    """A single submitted lookup: tracking number plus carrier API code."""

    tracking_number: str
    carrier: str

    def to_dict(self) -> Dict[str, Any]:
        return {"tracking_number": self.tracking_number, "carrier": self.carrier}


@dataclass(frozen=True)
class Carrier:
    """
    Carrier registry entry.

    Attributes:
        name: Display name
        logo: Asset path of the carrier logo
        api_code: Code sent to the tracking service and stored in the URL
    """

    name: str
    logo: str
    api_code: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Carrier":
        return cls(
            name=_require(data, "name", str),
            logo=data.get("logo", "") or "",
            api_code=_require(data, "api_code", str),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "logo": self.logo, "api_code": self.api_code}


def parse_envelope(payload: Any) -> TrackingData:
    """Extract ``TrackingData`` from a ``{"data": {...}}`` envelope."""
    if not isinstance(payload, dict):
        raise ValueError("Tracking response is not a JSON object")
    data: Optional[Dict[str, Any]] = payload.get("data")
    if data is None:
        raise ValueError("Tracking response has no 'data' field")
    return TrackingData.from_dict(data)
