"""
Tracking Session - the lookup workflow state machine

State Flow:
1. IDLE -> submit() -> LOADING
2. LOADING -> response -> TRACKING, or ERROR on any fetch failure
3. TRACKING / ERROR -> reset() -> IDLE
4. ERROR -> retry() -> LOADING
5. LOADING -> close() -> IDLE

The session keeps the location's query string in step with the last
submitted lookup, so a page reload (or a shared link) can resume it through
resume_from_url(). Only the most recent lookup may change state: a response
for an older lookup is discarded.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from .carriers import CarrierRegistry
from .client import TrackingClient
from .errors import TrackingError, ValidationError
from .models import LookupRequest, TrackingData
from .narrator import LoadingNarrator
from .resume import SessionLocation
from .states import (
    Failed,
    Idle,
    Loading,
    SessionState,
    SessionStatus,
    Tracking,
    can_transition,
    request_of,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState, SessionState], None]


class TrackingSession:
    """
    One user's tracking workflow.

    Args:
        client: Tracking service client (anything with ``async fetch(request)``)
        carriers: Registry the selected carrier must belong to
        location: Address holding the deep-link query parameters
        narrator: Loading narrator, started and stopped with LOADING

    Example:
        session = TrackingSession(TrackingClient(api_base))
        state = await session.submit("ABC123", "4px")
        if state.status == SessionStatus.TRACKING:
            print(state.data.current_status)
    """

    def __init__(
        self,
        client: TrackingClient,
        carriers: Optional[CarrierRegistry] = None,
        location: Optional[SessionLocation] = None,
        narrator: Optional[LoadingNarrator] = None,
    ):
        self.client = client
        self.carriers = carriers or CarrierRegistry()
        self.location = location or SessionLocation()
        self.narrator = narrator or LoadingNarrator()

        self.state: SessionState = Idle()
        self.tracking_number = ""
        self.selected_carrier = self.carriers.default.api_code

        self._lookup_id = 0
        self._listeners: List[StateListener] = []

    # ===== Accessors =====

    @property
    def status(self) -> SessionStatus:
        return self.state.status

    @property
    def tracking_data(self) -> Optional[TrackingData]:
        """Present only while TRACKING"""
        if isinstance(self.state, Tracking):
            return self.state.data
        return None

    def add_listener(self, listener: StateListener) -> None:
        """Call ``listener(old_state, new_state)`` on every transition."""
        self._listeners.append(listener)

    # ===== Operations =====

    def validate(self, tracking_number: Optional[str], carrier_code: Optional[str]) -> LookupRequest:
        """Build a lookup from raw input, raising ValidationError if unusable."""
        tracking_number = (tracking_number or "").strip()
        carrier_code = (carrier_code or "").strip()
        if not tracking_number:
            raise ValidationError("Tracking number is empty", user_message="Please enter a tracking number.")
        if not carrier_code:
            raise ValidationError("Carrier is empty", user_message="Please select a carrier.")
        if carrier_code not in self.carriers:
            raise ValidationError(
                f"Unknown carrier: {carrier_code}",
                user_message=f"'{carrier_code}' is not a supported carrier.",
            )
        return LookupRequest(tracking_number=tracking_number, carrier=carrier_code)

    async def submit(self, tracking_number: str, carrier_code: str) -> SessionState:
        """
        Look up a shipment.

        Enters LOADING before the first await, then settles in TRACKING or
        ERROR. If a newer submit, reset() or close() happens meanwhile, this
        lookup's result is dropped and the current state is returned.

        Raises:
            ValidationError: tracking number or carrier is missing/unknown;
                the state is left unchanged
        """
        request = self.validate(tracking_number, carrier_code)

        self.tracking_number = request.tracking_number
        self.selected_carrier = request.carrier
        self.location.replace_query(request)

        self._lookup_id += 1
        lookup_id = self._lookup_id
        self._transition(Loading(request=request, lookup_id=lookup_id))
        self.narrator.start()

        try:
            data = await self.client.fetch(request)
        except asyncio.CancelledError:
            if self._is_current(lookup_id):
                self.narrator.stop()
                self._lookup_id += 1
                self.location.clear_query()
                self._transition(Idle())
            raise
        except TrackingError as e:
            logger.error(f"Lookup {request.tracking_number} ({request.carrier}) failed: {e}")
            outcome: SessionState = Failed(request=request, error_type=e.error_type, message=e.user_message)
        except Exception as e:
            logger.error(f"Unexpected error looking up {request.tracking_number}: {e}", exc_info=True)
            outcome = Failed(request=request, error_type=TrackingError.error_type, message=TrackingError.default_message)
        else:
            outcome = Tracking(request=request, data=data)

        if not self._is_current(lookup_id):
            logger.info(f"Discarding stale response for {request.tracking_number} (lookup {lookup_id})")
            return self.state

        self.narrator.stop()
        self._transition(outcome)
        return self.state

    async def resume_from_url(self) -> Optional[SessionState]:
        """Resume the lookup encoded in the location, if any."""
        request = self.location.lookup()
        if request is None:
            return None
        logger.info(f"Resuming lookup from URL: {request.tracking_number} ({request.carrier})")
        return await self.submit(request.tracking_number, request.carrier)

    async def retry(self) -> SessionState:
        """Re-submit the lookup that failed."""
        if not isinstance(self.state, Failed):
            logger.warning(f"Retry ignored in state {self.status.value}")
            return self.state
        request = self.state.request
        return await self.submit(request.tracking_number, request.carrier)

    def reset(self) -> bool:
        """Back to the search screen: clear number, data and query string."""
        if self.status not in (SessionStatus.TRACKING, SessionStatus.ERROR):
            logger.warning(f"Reset ignored in state {self.status.value}")
            return False

        self._lookup_id += 1
        self.tracking_number = ""
        self.location.clear_query()
        return self._transition(Idle())

    def close(self) -> None:
        """
        Release the narrator timer and ignore any in-flight response.

        A lookup still in flight is abandoned: the session returns to IDLE and
        the query string is cleared.
        """
        self._lookup_id += 1
        self.narrator.stop()
        if isinstance(self.state, Loading):
            self.location.clear_query()
            self._transition(Idle())

    # ===== Internals =====

    def _is_current(self, lookup_id: int) -> bool:
        return lookup_id == self._lookup_id

    def _transition(self, new_state: SessionState) -> bool:
        old_state = self.state
        if not can_transition(old_state.status, new_state.status):
            logger.warning(f"Invalid transition: {old_state.status.value} -> {new_state.status.value}")
            return False

        self.state = new_state
        request = request_of(new_state)
        suffix = f" [{request.tracking_number}]" if request else ""
        logger.debug(f"Session: {old_state.status.value} -> {new_state.status.value}{suffix}")

        for listener in list(self._listeners):
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.warning(f"State listener failed: {e}")
        return True
