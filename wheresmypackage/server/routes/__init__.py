"""Route registration for the web front end."""

from fastapi import FastAPI

from .pages import router as pages_router
from .tracking import router as tracking_router


def register_routes(app: FastAPI):
    app.include_router(pages_router)
    app.include_router(tracking_router)
