"""
Command-line entry point.

    wheresmypackage track ABC123 --carrier 4px
    wheresmypackage serve --port 8000
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .client import TrackingClient
from .config import Settings, load_settings
from .errors import ValidationError
from .narrator import LoadingNarrator
from .presentation import build_view, render_text
from .session import TrackingSession
from .states import SessionStatus

logger = logging.getLogger(__name__)


async def track(settings: Settings, tracking_number: str, carrier: Optional[str], out=None) -> int:
    """Run one lookup, printing narrator messages while it is in flight."""
    out = out or sys.stdout
    narrator = LoadingNarrator(
        messages=settings.loading_messages,
        interval=settings.narrator_interval,
        on_message=lambda m: print(m, file=out, flush=True),
    )
    client = TrackingClient(api_base=settings.api_base, timeout=settings.timeout)
    session = TrackingSession(client, carriers=settings.carriers, narrator=narrator)

    try:
        await session.submit(tracking_number, carrier or settings.carriers.default.api_code)
    except ValidationError as e:
        print(f"Error: {e.user_message}", file=out)
        return 2
    finally:
        session.close()

    print(render_text(build_view(session)), file=out)
    return 0 if session.status == SessionStatus.TRACKING else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wheresmypackage", description="Track a shipment")
    parser.add_argument("--config", help="Path to YAML config file")
    sub = parser.add_subparsers(dest="command", required=True)

    track_parser = sub.add_parser("track", help="Look up a tracking number")
    track_parser.add_argument("tracking_number")
    track_parser.add_argument("--carrier", help="Carrier API code (default: first configured carrier)")

    serve_parser = sub.add_parser("serve", help="Run the web front end")
    serve_parser.add_argument("--host")
    serve_parser.add_argument("--port")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(name)s - %(message)s",
    )

    if args.command == "serve":
        from .server.main import main as serve
        serve_args = []
        if args.host:
            serve_args += ["--host", args.host]
        if args.port:
            serve_args += ["--port", args.port]
        if args.config:
            from .server.app import set_settings
            set_settings(load_settings(args.config))
        serve(serve_args)
        return 0

    settings = load_settings(args.config)
    return asyncio.run(track(settings, args.tracking_number, args.carrier))


if __name__ == "__main__":
    sys.exit(main())
