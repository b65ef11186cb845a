"""CLI argument parsing and uvicorn entry point."""

import logging
import os

from ..constants import ENV_HOST, ENV_PORT


def main(argv=None):
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Where's My Package web server")
    parser.add_argument("--host", default=os.getenv(ENV_HOST, "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv(ENV_PORT, "8000")))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(name)s - %(message)s",
    )

    from .app import api
    uvicorn.run(api, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
