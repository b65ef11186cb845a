"""HTML page routes: search form, deep-link resume, and result pages."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ...client import TrackingClient
from ...errors import ValidationError
from ...presentation import build_view, render_page
from ...resume import SessionLocation
from ..app import get_tracking_client, new_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, client: TrackingClient = Depends(get_tracking_client)):
    """Search form, or the result of the lookup encoded in the query string."""
    session = new_session(client, request)
    try:
        await session.resume_from_url()
    except ValidationError as e:
        logger.info(f"Deep link rejected: {e}")
        return HTMLResponse(render_page(build_view(session, error_message=e.user_message)), status_code=400)
    finally:
        session.close()

    return HTMLResponse(render_page(build_view(session)))


@router.get("/track")
async def track(
    request: Request,
    tracking_number: str = "",
    carrier: str = "",
    client: TrackingClient = Depends(get_tracking_client),
):
    """Search-form target: validate, then redirect to the shareable deep link."""
    session = new_session(client, request)
    try:
        lookup = session.validate(tracking_number, carrier)
    except ValidationError as e:
        session.tracking_number = tracking_number.strip()
        if carrier in session.carriers:
            session.selected_carrier = carrier
        return HTMLResponse(render_page(build_view(session, error_message=e.user_message)), status_code=400)

    location = SessionLocation(path="/")
    location.replace_query(lookup)
    return RedirectResponse(location.url, status_code=303)
