from __future__ import annotations

import argparse

import uvicorn

from .app import create_app
from .config import get_settings
from .log import configure_logging


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Run the sketchfloat broadcast relay.")
    ap.add_argument("--host", default=settings.host, help=f"Bind address (default {settings.host})")
    ap.add_argument("--port", type=int, default=settings.port, help=f"Listen port (default {settings.port})")
    args = ap.parse_args()

    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=args.host,
        port=args.port,
        ws_max_size=settings.ws_max_size,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
