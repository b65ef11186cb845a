"""Tests for wheresmypackage.resume: deep-link encoding and the session location"""

from wheresmypackage.models import LookupRequest
from wheresmypackage.resume import LookupCodec, SessionLocation


class TestLookupCodec:

    def test_encode(self):
        assert LookupCodec().encode(LookupRequest("ABC123", "4px")) == "trackingID=ABC123&carrier=4px"

    def test_decode(self):
        assert LookupCodec().decode("trackingID=ABC123&carrier=4px") == LookupRequest("ABC123", "4px")

    def test_decode_accepts_leading_question_mark(self):
        assert LookupCodec().decode("?carrier=4px&trackingID=ABC123") == LookupRequest("ABC123", "4px")

    def test_decode_missing_part_returns_none(self):
        codec = LookupCodec()
        assert codec.decode("trackingID=ABC123") is None
        assert codec.decode("carrier=4px") is None
        assert codec.decode("trackingID=&carrier=4px") is None
        assert codec.decode("") is None

    def test_special_characters_survive(self):
        codec = LookupCodec()
        request = LookupRequest("AB 12&34/5", "4px")
        assert codec.decode(codec.encode(request)) == request

    def test_custom_parameter_names(self):
        codec = LookupCodec(tracking_param="n", carrier_param="c")
        assert codec.encode(LookupRequest("X1", "4px")) == "n=X1&c=4px"


class TestSessionLocation:

    def test_from_url(self):
        location = SessionLocation.from_url("/?trackingID=ABC123&carrier=4px")
        assert location.path == "/"
        assert location.lookup() == LookupRequest("ABC123", "4px")

    def test_replace_query_keeps_path(self):
        location = SessionLocation(path="/track-page")
        location.replace_query(LookupRequest("ABC123", "4px"))
        assert location.url == "/track-page?trackingID=ABC123&carrier=4px"
        assert location.replace_count == 1

    def test_clear_query(self):
        location = SessionLocation.from_url("/?trackingID=ABC123&carrier=4px")
        location.clear_query()
        assert location.query == ""
        assert location.url == "/"
        assert location.lookup() is None

    def test_empty_path_defaults_to_root(self):
        assert SessionLocation(path="").url == "/"
