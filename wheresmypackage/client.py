"""
Tracking service client

Queries ``GET {api_base}/track/{tracking_number}/{carrier}`` and returns the
parsed ``TrackingData``. Every failure is raised as a ``TransportError``
(``NotFoundError`` for HTTP 404) so the session can handle them at one place.
"""

import json
import logging
from typing import Optional
from urllib.parse import quote

import httpx

from .constants import DEFAULT_API_BASE, DEFAULT_TIMEOUT_SECONDS, TRACK_PATH
from .errors import NotFoundError, TransportError
from .models import LookupRequest, TrackingData, parse_envelope

logger = logging.getLogger(__name__)


class TrackingClient:
    """
    Async client for the tracking service.

    Args:
        api_base: Base URL of the tracking service
        timeout: Request timeout in seconds
        http_client: Shared ``httpx.AsyncClient``; when omitted a client is
            created per request

    Example:
        client = TrackingClient("https://track.example.com")
        data = await client.fetch(LookupRequest("ABC123", "4px"))
    """

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    def build_url(self, request: LookupRequest) -> str:
        path = TRACK_PATH.format(
            tracking_number=quote(request.tracking_number, safe=""),
            carrier=quote(request.carrier, safe=""),
        )
        return f"{self.api_base}{path}"

    async def fetch(self, request: LookupRequest) -> TrackingData:
        """Fetch tracking data for one lookup."""
        url = self.build_url(request)
        logger.info(f"Fetching tracking data for {request.tracking_number} ({request.carrier})")

        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Tracking service HTTP error: {status_code} - {e.response.text[:300]}")
            if status_code == 404:
                raise NotFoundError(f"No shipment {request.tracking_number}", status_code=status_code) from e
            raise TransportError(
                f"Tracking service returned HTTP {status_code}",
                user_message=self._user_message_for_status(status_code),
                status_code=status_code,
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Tracking service timed out after {self.timeout}s: {e}")
            raise TransportError(f"Timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Tracking service connection error: {e}")
            raise TransportError(f"Connection failed: {e}") from e

        try:
            return parse_envelope(response.json())
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            logger.error(f"Failed to parse tracking response: {e}")
            raise TransportError(
                f"Malformed tracking response: {e}",
                user_message="The tracking service sent a response we could not read. Please try again later.",
            ) from e

    @staticmethod
    def _user_message_for_status(status_code: int) -> str:
        """Convert an HTTP status to a user-friendly message."""
        if status_code == 429:
            return "Too many tracking requests. Please try again later."
        if status_code >= 500:
            return "Tracking service is experiencing issues. Please try again later."
        return "Unable to check tracking status. Please try again later."
