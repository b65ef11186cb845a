"""
Test that the public API imports cleanly.
"""


def test_core_imports():
    """Test top-level exports"""
    from wheresmypackage import (
        TrackingSession,
        TrackingClient,
        SessionStatus,
        LookupCodec,
        LoadingNarrator,
        build_timeline,
        classify_status,
        format_timestamp,
    )

    assert TrackingSession is not None
    assert TrackingClient is not None
    assert SessionStatus is not None
    assert LookupCodec is not None
    assert LoadingNarrator is not None
    assert build_timeline is not None
    assert classify_status is not None
    assert format_timestamp is not None


def test_error_hierarchy():
    """NotFoundError is a TransportError; all are TrackingErrors"""
    from wheresmypackage import NotFoundError, TrackingError, TransportError, ValidationError

    assert issubclass(NotFoundError, TransportError)
    assert issubclass(TransportError, TrackingError)
    assert issubclass(ValidationError, TrackingError)


def test_server_imports():
    """Test the web front end builds its app"""
    from wheresmypackage.server.app import api

    paths = {route.path for route in api.routes}
    assert "/" in paths
    assert "/api/track/{tracking_number}/{carrier}" in paths
