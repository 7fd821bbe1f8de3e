from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stderr handler on the `sketchfloat` logger (safe to call twice)."""
    root = logging.getLogger("sketchfloat")
    root.setLevel(level.upper() if isinstance(level, str) else level)
    if not any(getattr(h, "_sketchfloat", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sketchfloat = True  # type: ignore[attr-defined]
        root.addHandler(handler)
