"""JSON API routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ...client import TrackingClient
from ...errors import NotFoundError, ValidationError
from ...presentation import build_view
from ...states import Failed, Tracking
from ..app import get_settings, get_tracking_client, new_session
from ..models import CarrierResponse, TrackResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz():
    return {"status": "ok"}


@router.get("/api/carriers", response_model=List[CarrierResponse])
async def list_carriers():
    """List the carriers a lookup can target."""
    return get_settings().carriers.to_list()


@router.get("/api/track/{tracking_number}/{carrier}", response_model=TrackResponse)
async def track_shipment(
    tracking_number: str,
    carrier: str,
    request: Request,
    client: TrackingClient = Depends(get_tracking_client),
):
    """Look up one shipment and return its status with the grouped timeline."""
    session = new_session(client, request)
    try:
        state = await session.submit(tracking_number, carrier)
    except ValidationError as e:
        raise HTTPException(400, e.user_message)
    finally:
        session.close()

    if isinstance(state, Failed):
        status_code = 404 if state.error_type == NotFoundError.error_type else 502
        body = TrackResponse(
            status=state.status.value,
            tracking_number=state.request.tracking_number,
            carrier=state.request.carrier,
            error_type=state.error_type,
            error_message=state.message,
        )
        return JSONResponse(status_code=status_code, content=body.model_dump())

    if not isinstance(state, Tracking):
        raise HTTPException(500, "Lookup did not complete")

    view = build_view(session)
    return TrackResponse(
        status=state.status.value,
        tracking_number=state.request.tracking_number,
        carrier=state.request.carrier,
        current_status=view.current_status,
        status_description=view.status_description,
        severity=view.severity.value,
        data=state.data.to_dict(),
        timeline=[group.to_dict() for group in view.timeline],
    )
