"""
Timeline - turns a flat transit-event list into display groups

Events are sorted newest first and consecutive events at the same location
are clustered. An event at the "Unknown" location always gets a group of
its own, even right after another Unknown event.

Example:
    events = [NYC@300, NYC@200, Unknown@150, Unknown@100, LA@50]
    group_events(events)
    # [[NYC@300, NYC@200], [Unknown@150], [Unknown@100], [LA@50]]
"""

import re
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .constants import UNKNOWN_LOCATION
from .formatting import format_timestamp
from .models import TransitEvent

EventGroup = List[TransitEvent]

_COMMA_WITHOUT_SPACE = re.compile(r",(?!\s)")


def sort_events(events: Iterable[TransitEvent]) -> List[TransitEvent]:
    """Most recent first. Ties keep their input order."""
    return sorted(events, key=lambda e: e.timestamp, reverse=True)


def group_events(sorted_events: Sequence[TransitEvent]) -> List[EventGroup]:
    """Cluster consecutive same-location events of an already sorted list."""
    groups: List[EventGroup] = []
    for index, event in enumerate(sorted_events):
        if (
            index == 0
            or event.location != sorted_events[index - 1].location
            or event.location == UNKNOWN_LOCATION
        ):
            groups.append([event])
        else:
            groups[-1].append(event)
    return groups


def known_events(sorted_events: Sequence[TransitEvent]) -> List[TransitEvent]:
    return [e for e in sorted_events if e.location != UNKNOWN_LOCATION]


def event_rank(event: TransitEvent, sorted_events: Sequence[TransitEvent]) -> Optional[int]:
    """
    Position number shown next to a known-location event.

    rank = (number of known-location events) - (index among them), so the
    most recent event carries the highest number and the oldest is 1.
    Unknown-location events have no rank.
    """
    if event.location == UNKNOWN_LOCATION:
        return None
    known = known_events(sorted_events)
    for index, candidate in enumerate(known):
        if candidate is event:
            return len(known) - index
    # Equal but distinct instance (e.g. a re-parsed payload)
    return len(known) - known.index(event)


def format_location(location: str) -> str:
    """Ensure a space follows every comma: "Shenzhen,GD,CN" -> "Shenzhen, GD, CN"."""
    return _COMMA_WITHOUT_SPACE.sub(", ", location)


@dataclass
class TimelineEntry:
    """One rendered event row"""
    description: str
    timestamp: int
    display_time: str
    rank: Optional[int]
    is_unknown: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "timestamp": self.timestamp,
            "display_time": self.display_time,
            "rank": self.rank,
            "is_unknown": self.is_unknown,
        }


@dataclass
class TimelineGroup:
    """One rendered cluster; ``header`` is None for Unknown-location groups"""
    location: str
    header: Optional[str]
    entries: List[TimelineEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "header": self.header,
            "entries": [e.to_dict() for e in self.entries],
        }


def build_timeline(events: Iterable[TransitEvent], tz: Optional[tzinfo] = None) -> List[TimelineGroup]:
    """Sort, group, rank and format events for display."""
    sorted_events = sort_events(events)
    known = known_events(sorted_events)
    # Identity-keyed so duplicate events keep distinct ranks
    ranks = {id(e): len(known) - index for index, e in enumerate(known)}

    timeline: List[TimelineGroup] = []
    for group in group_events(sorted_events):
        location = group[0].location
        is_unknown = location == UNKNOWN_LOCATION
        timeline.append(TimelineGroup(
            location=location,
            header=None if is_unknown else format_location(location),
            entries=[
                TimelineEntry(
                    description=event.description,
                    timestamp=event.timestamp,
                    display_time=format_timestamp(event.timestamp, tz),
                    rank=ranks.get(id(event)),
                    is_unknown=is_unknown,
                )
                for event in group
            ],
        ))
    return timeline
