"""
Presentation layer - view models and rendering

``build_view`` snapshots a session into a ``PageView``; ``render_page``
turns it into HTML through Jinja2 templates and ``render_text`` into a
plain-text report for the terminal.
"""

import logging
import pathlib
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .constants import FLAG_CDN_URL
from .formatting import StatusSeverity, classify_status, format_timestamp
from .models import Country, TrackingData
from .session import TrackingSession
from .states import Failed, Loading, SessionStatus, Tracking
from .timeline import TimelineGroup, build_timeline

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = pathlib.Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def flag_url(country: Country) -> str:
    return FLAG_CDN_URL.format(code=country.code.lower())


@dataclass
class RouteOverview:
    origin_name: str
    origin_flag: str
    destination_name: str
    destination_flag: str
    days_in_transit: int

    @classmethod
    def from_data(cls, data: TrackingData) -> "RouteOverview":
        return cls(
            origin_name=data.origin.name,
            origin_flag=flag_url(data.origin),
            destination_name=data.destination.name,
            destination_flag=flag_url(data.destination),
            days_in_transit=data.days_in_transit,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin": {"name": self.origin_name, "flag": self.origin_flag},
            "destination": {"name": self.destination_name, "flag": self.destination_flag},
            "days_in_transit": self.days_in_transit,
        }


@dataclass
class PageView:
    """Everything a template needs for one state of the session."""
    status: SessionStatus
    carriers: List[Dict[str, Any]]
    selected_carrier: str
    tracking_number: str = ""
    loading_message: Optional[str] = None
    current_status: Optional[str] = None
    status_description: Optional[str] = None
    severity: StatusSeverity = StatusSeverity.NEUTRAL
    last_updated: Optional[str] = None
    route: Optional[RouteOverview] = None
    timeline: List[TimelineGroup] = field(default_factory=list)
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    retry_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "tracking_number": self.tracking_number,
            "selected_carrier": self.selected_carrier,
            "loading_message": self.loading_message,
            "current_status": self.current_status,
            "status_description": self.status_description,
            "severity": self.severity.value,
            "last_updated": self.last_updated,
            "route": self.route.to_dict() if self.route else None,
            "timeline": [g.to_dict() for g in self.timeline],
            "error_type": self.error_type,
            "error_message": self.error_message,
        }


def build_view(
    session: TrackingSession,
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
    error_message: Optional[str] = None,
) -> PageView:
    """
    Snapshot ``session`` for rendering.

    Args:
        session: The session to render
        tz: Timezone for event times (defaults to local)
        now: "Last updated" moment (defaults to now)
        error_message: Validation message to show on the search form
    """
    state = session.state
    view = PageView(
        status=state.status,
        carriers=session.carriers.to_list(),
        selected_carrier=session.selected_carrier,
        tracking_number=session.tracking_number,
        error_message=error_message,
    )

    if isinstance(state, Loading):
        view.loading_message = session.narrator.message
    elif isinstance(state, Tracking):
        data = state.data
        moment = now or datetime.now(tz)
        view.current_status = data.current_status
        view.status_description = data.current_status_description
        view.severity = classify_status(data.current_status)
        view.last_updated = format_timestamp(moment.timestamp() * 1000, tz)
        view.route = RouteOverview.from_data(data)
        view.timeline = build_timeline(data.transit_events, tz)
    elif isinstance(state, Failed):
        view.error_type = state.error_type
        view.error_message = state.message
        view.retry_url = f"/?{session.location.codec.encode(state.request)}"

    return view


def render_page(view: PageView) -> str:
    """Render the full HTML page for ``view``."""
    template = _env.get_template("page.html")
    return template.render(view=view, Status=SessionStatus)


def render_text(view: PageView) -> str:
    """Plain-text rendering for the CLI."""
    lines: List[str] = []
    if view.status == SessionStatus.ERROR:
        lines.append(f"Error: {view.error_message}")
        return "\n".join(lines)
    if view.status != SessionStatus.TRACKING or view.route is None:
        return view.loading_message or ""

    lines.append(f"#{view.tracking_number}  [{view.current_status}]")
    if view.status_description:
        lines.append(view.status_description)
    lines.append(
        f"{view.route.origin_name} -> {view.route.destination_name} "
        f"({view.route.days_in_transit} days in transit)"
    )
    lines.append("")
    lines.append("Transit Events")
    for group in view.timeline:
        if group.header:
            lines.append(f"  {group.header}")
        for entry in group.entries:
            marker = "(i)" if entry.is_unknown else f"{entry.rank:>3}"
            lines.append(f"    {marker} {entry.description}")
            lines.append(f"        {entry.display_time}")
    return "\n".join(lines)
