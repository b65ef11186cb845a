"""Shared fixtures: canned tracking payloads and a controllable tracking client."""

import asyncio
import copy
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from wheresmypackage.client import TrackingClient
from wheresmypackage.models import LookupRequest, TrackingData

API_BASE = "https://track.test"


SAMPLE_DATA: Dict[str, Any] = {
    "currentStatus": "In Transit",
    "currentStatusDescription": "Departed from sorting center",
    "origin": {"name": "China", "code": "CN"},
    "destination": {"name": "United States", "code": "US"},
    "daysInTransit": 6,
    "transitEvents": [
        {"description": "Shipment information received", "location": "Shenzhen,GD,CN", "timestamp": 1000},
        {"description": "Arrived at sorting center", "location": "Shenzhen,GD,CN", "timestamp": 2000},
        {"description": "Handed over to airline", "location": "Unknown", "timestamp": 3000},
        {"description": "Departed from sorting center", "location": "Hong Kong, HK", "timestamp": 4000},
    ],
}


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return {"data": copy.deepcopy(SAMPLE_DATA)}


@pytest.fixture
def sample_data() -> TrackingData:
    return TrackingData.from_dict(copy.deepcopy(SAMPLE_DATA))


def make_http_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient that answers every request through ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_tracking_client(handler: Callable[[httpx.Request], httpx.Response]) -> TrackingClient:
    return TrackingClient(api_base=API_BASE, http_client=make_http_client(handler))


class ControlledClient:
    """
    Tracking client whose responses are released by the test.

    Each fetch waits on a future keyed by tracking number; the test calls
    ``resolve`` or ``fail`` to let it complete.
    """

    def __init__(self):
        self.calls: List[LookupRequest] = []
        self._pending: Dict[str, asyncio.Future] = {}

    def _future(self, tracking_number: str) -> asyncio.Future:
        if tracking_number not in self._pending:
            self._pending[tracking_number] = asyncio.get_running_loop().create_future()
        return self._pending[tracking_number]

    async def fetch(self, request: LookupRequest) -> TrackingData:
        self.calls.append(request)
        return await self._future(request.tracking_number)

    def resolve(self, tracking_number: str, data: TrackingData) -> None:
        self._future(tracking_number).set_result(data)

    def fail(self, tracking_number: str, error: Exception) -> None:
        self._future(tracking_number).set_exception(error)


class StaticClient:
    """Tracking client that answers immediately with ``data`` or raises ``error``."""

    def __init__(self, data: Optional[TrackingData] = None, error: Optional[Exception] = None):
        self.data = data
        self.error = error
        self.calls: List[LookupRequest] = []

    async def fetch(self, request: LookupRequest) -> TrackingData:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def controlled_client() -> ControlledClient:
    return ControlledClient()


@pytest.fixture
def static_client():
    """Factory: ``static_client(data=..., error=...)``"""
    return StaticClient


@pytest.fixture
def mock_tracking_client():
    """Factory: ``mock_tracking_client(handler)`` -> TrackingClient over httpx.MockTransport"""
    return make_tracking_client
