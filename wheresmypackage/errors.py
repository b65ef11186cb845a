"""
Error taxonomy for tracking lookups.

Fetch failures (``TransportError`` and ``NotFoundError``) are caught at the
session's submit boundary and turned into the ``Failed`` state. Only
``ValidationError`` reaches the caller.
"""

from typing import Optional


class TrackingError(Exception):
    """Base class for all lookup errors."""

    error_type = "tracking_error"
    default_message = "Something went wrong. Please try again later."

    def __init__(self, message: str = "", user_message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.user_message = user_message or self.default_message


class ValidationError(TrackingError):
    """Tracking number or carrier missing or not recognised."""

    error_type = "validation_error"
    default_message = "Please enter a tracking number and pick a carrier."


class TransportError(TrackingError):
    """Network failure, non-2xx response, or an unreadable payload."""

    error_type = "transport_error"
    default_message = "Unable to check tracking status right now. Please try again in a few minutes."

    def __init__(
        self,
        message: str = "",
        user_message: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, user_message)
        self.status_code = status_code


class NotFoundError(TransportError):
    """The carrier reports no shipment for this tracking number."""

    error_type = "not_found"
    default_message = "No tracking info found for this number. Please check it and try again."
