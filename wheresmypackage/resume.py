"""
Resumable session - deep links through URL query parameters

``LookupCodec`` turns a lookup into ``trackingID=...&carrier=...`` and back.
``SessionLocation`` models the address bar: the session only ever replaces
its query string, it never pushes a new history entry.
"""

import logging
from typing import List, Optional
from urllib.parse import parse_qs, urlencode, urlsplit

from .constants import QUERY_CARRIER, QUERY_TRACKING_ID
from .models import LookupRequest

logger = logging.getLogger(__name__)


class LookupCodec:
    """Encode/decode a ``LookupRequest`` as a URL query string."""

    def __init__(self, tracking_param: str = QUERY_TRACKING_ID, carrier_param: str = QUERY_CARRIER):
        self.tracking_param = tracking_param
        self.carrier_param = carrier_param

    def encode(self, request: LookupRequest) -> str:
        return urlencode({
            self.tracking_param: request.tracking_number,
            self.carrier_param: request.carrier,
        })

    def decode(self, query: str) -> Optional[LookupRequest]:
        """Return the lookup stored in ``query``, or None if either part is missing or blank."""
        params = parse_qs(query.lstrip("?"), keep_blank_values=True)
        tracking_number = self._first(params.get(self.tracking_param))
        carrier = self._first(params.get(self.carrier_param))
        if not tracking_number or not carrier:
            return None
        return LookupRequest(tracking_number=tracking_number, carrier=carrier)

    @staticmethod
    def _first(values: Optional[List[str]]) -> str:
        if not values:
            return ""
        return values[0].strip()


class SessionLocation:
    """
    Current page address of one tracking session.

    Example:
        location = SessionLocation.from_url("/?trackingID=ABC123&carrier=4px")
        location.lookup()          # LookupRequest("ABC123", "4px")
        location.clear_query()
        location.url               # "/"
    """

    def __init__(self, path: str = "/", query: str = "", codec: Optional[LookupCodec] = None):
        self.path = path or "/"
        self.query = query.lstrip("?")
        self.codec = codec or LookupCodec()
        self.replace_count = 0

    @classmethod
    def from_url(cls, url: str, codec: Optional[LookupCodec] = None) -> "SessionLocation":
        parts = urlsplit(url)
        return cls(path=parts.path, query=parts.query, codec=codec)

    @property
    def url(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path

    def lookup(self) -> Optional[LookupRequest]:
        return self.codec.decode(self.query)

    def replace_query(self, request: LookupRequest) -> None:
        """Store ``request`` in the query string in place."""
        self.query = self.codec.encode(request)
        self.replace_count += 1
        logger.debug(f"Location replaced: {self.url}")

    def clear_query(self) -> None:
        self.query = ""
        self.replace_count += 1
        logger.debug(f"Location cleared: {self.url}")

    def __repr__(self) -> str:
        return f"SessionLocation({self.url!r})"
