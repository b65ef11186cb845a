"""
Display formatting - timestamps and status severity

Both helpers are pure. Timestamps always use US English conventions,
independent of the process locale.
"""

from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Optional

# Shown for instants outside the range datetime can represent
INVALID_TIMESTAMP = "Invalid Date"

# Fixed names so output does not depend on ``locale.setlocale``
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class StatusSeverity(str, Enum):
    """Severity class of a shipment status, used to pick a badge colour"""
    NEUTRAL = "neutral"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def color(self) -> str:
        return _SEVERITY_COLORS[self]


_SEVERITY_COLORS = {
    StatusSeverity.NEUTRAL: "primary",
    StatusSeverity.WARNING: "amber",
    StatusSeverity.CRITICAL: "red",
}


def classify_status(status: Optional[str]) -> StatusSeverity:
    """
    Map a free-text status to a severity.

    "delayed" is a warning, "exception" is critical, everything else
    (in transit, delivered, empty) is neutral. Matching ignores case.
    """
    normalized = (status or "").strip().lower()
    if normalized == "delayed":
        return StatusSeverity.WARNING
    if normalized == "exception":
        return StatusSeverity.CRITICAL
    return StatusSeverity.NEUTRAL


def format_timestamp(epoch_ms: float, tz: Optional[tzinfo] = None) -> str:
    """
    Render epoch milliseconds as e.g. ``"Jan 1, 1970, 12:00:00 AM UTC"``.

    Args:
        epoch_ms: Milliseconds since the Unix epoch
        tz: Timezone to render in (defaults to the local timezone)

    Returns:
        Month, day, year, 12-hour time with seconds, and the timezone
        abbreviation, or ``INVALID_TIMESTAMP`` when the instant cannot be
        represented (beyond year 9999, NaN, infinite)
    """
    try:
        moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
        moment = moment.astimezone(tz) if tz is not None else moment.astimezone()
    except (OverflowError, ValueError, OSError):
        return INVALID_TIMESTAMP

    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    tz_name = moment.tzname() or moment.strftime("%z")

    return (
        f"{_MONTH_ABBR[moment.month - 1]} {moment.day}, {moment.year}, "
        f"{hour:02d}:{moment.minute:02d}:{moment.second:02d} {meridiem} {tz_name}"
    )
