"""Pydantic response models for the JSON API."""

from typing import List, Optional

from pydantic import BaseModel


class CarrierResponse(BaseModel):
    name: str
    logo: str
    api_code: str


class TimelineEntryResponse(BaseModel):
    description: str
    timestamp: int
    display_time: str
    rank: Optional[int] = None
    is_unknown: bool


class TimelineGroupResponse(BaseModel):
    location: str
    header: Optional[str] = None
    entries: List[TimelineEntryResponse]


class TrackResponse(BaseModel):
    status: str  # "tracking" or "error"
    tracking_number: str
    carrier: str
    current_status: Optional[str] = None
    status_description: Optional[str] = None
    severity: Optional[str] = None
    data: Optional[dict] = None  # raw tracking data, camelCase as received
    timeline: List[TimelineGroupResponse] = []
    error_type: Optional[str] = None
    error_message: Optional[str] = None
