"""Tests for the FastAPI front end (wheresmypackage.server)"""

import httpx
import pytest
from fastapi.testclient import TestClient

from wheresmypackage.client import TrackingClient
from wheresmypackage.config import Settings
from wheresmypackage.server.app import api, get_tracking_client, set_settings


@pytest.fixture
def service(sample_payload):
    """Fake tracking service; tests can swap ``service["handler"]``."""
    state = {"requests": []}

    def ok(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=sample_payload)

    state["handler"] = ok
    return state


@pytest.fixture
def web(service):
    def handler(request):
        service["requests"].append(request)
        return service["handler"](request)

    def override():
        transport = httpx.MockTransport(handler)
        return TrackingClient(api_base="https://track.test", http_client=httpx.AsyncClient(transport=transport))

    set_settings(Settings(api_base="https://track.test", narrator_interval=60))
    api.dependency_overrides[get_tracking_client] = override
    try:
        yield TestClient(api)
    finally:
        api.dependency_overrides.clear()
        set_settings(None)


class TestPages:

    def test_index_shows_search_form(self, web, service):
        response = web.get("/")
        assert response.status_code == 200
        assert 'action="/track"' in response.text
        assert service["requests"] == []

    def test_deep_link_resumes_lookup(self, web, service):
        response = web.get("/?trackingID=ABC123&carrier=4px")

        assert response.status_code == 200
        assert "#ABC123" in response.text
        assert "Transit Events" in response.text
        assert str(service["requests"][0].url) == "https://track.test/track/ABC123/4px"

    def test_partial_deep_link_is_ignored(self, web, service):
        response = web.get("/?trackingID=ABC123")
        assert response.status_code == 200
        assert 'action="/track"' in response.text
        assert service["requests"] == []

    def test_deep_link_with_unknown_carrier(self, web, service):
        response = web.get("/?trackingID=ABC123&carrier=nope")
        assert response.status_code == 400
        assert "not a supported carrier" in response.text
        assert service["requests"] == []

    def test_failed_lookup_shows_error_and_retry(self, web, service):
        service["handler"] = lambda request: httpx.Response(500)

        response = web.get("/?trackingID=ABC123&carrier=4px")

        assert response.status_code == 200
        assert 'role="alert"' in response.text
        assert "Try again" in response.text

    def test_far_future_event_still_renders(self, web, service, sample_payload):
        sample_payload["data"]["transitEvents"][0]["timestamp"] = 4 * 10**14

        response = web.get("/?trackingID=ABC123&carrier=4px")

        assert response.status_code == 200
        assert "Invalid Date" in response.text

    def test_track_redirects_to_deep_link(self, web):
        response = web.get("/track", params={"tracking_number": " ABC123 ", "carrier": "4px"}, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/?trackingID=ABC123&carrier=4px"

    def test_track_with_empty_number(self, web, service):
        response = web.get("/track", params={"tracking_number": "", "carrier": "4px"}, follow_redirects=False)
        assert response.status_code == 400
        assert "Please enter a tracking number." in response.text
        assert service["requests"] == []


class TestApi:

    def test_track_success(self, web):
        response = web.get("/api/track/ABC123/4px")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "tracking"
        assert body["current_status"] == "In Transit"
        assert body["severity"] == "neutral"
        assert body["data"]["daysInTransit"] == 6
        assert [g["header"] for g in body["timeline"]] == ["Hong Kong, HK", None, "Shenzhen, GD, CN"]
        assert [e["rank"] for g in body["timeline"] for e in g["entries"]] == [3, None, 2, 1]

    def test_track_not_found(self, web, service):
        service["handler"] = lambda request: httpx.Response(404)

        response = web.get("/api/track/ABC123/4px")

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"
        assert response.json()["status"] == "error"

    def test_track_upstream_failure(self, web, service):
        service["handler"] = lambda request: httpx.Response(200, text="not json")
        response = web.get("/api/track/ABC123/4px")
        assert response.status_code == 502
        assert response.json()["error_type"] == "transport_error"

    def test_track_far_future_event(self, web, service, sample_payload):
        sample_payload["data"]["transitEvents"][0]["timestamp"] = 4 * 10**14

        response = web.get("/api/track/ABC123/4px")

        assert response.status_code == 200
        entries = [e for g in response.json()["timeline"] for e in g["entries"]]
        assert entries[0]["timestamp"] == 4 * 10**14
        assert entries[0]["display_time"] == "Invalid Date"

    def test_track_unknown_carrier(self, web):
        response = web.get("/api/track/ABC123/nope")
        assert response.status_code == 400

    def test_carriers(self, web):
        response = web.get("/api/carriers")
        assert response.json() == [{"name": "4PX", "logo": "/carrierlogos/4px.png", "api_code": "4px"}]

    def test_healthz(self, web):
        assert web.get("/healthz").json() == {"status": "ok"}
