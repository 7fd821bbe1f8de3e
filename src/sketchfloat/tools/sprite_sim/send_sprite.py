from __future__ import annotations

import argparse
import asyncio
import math
import random

import websockets

from sketchfloat.protocol import Sprite, confirm_sprite
from sketchfloat.rendering import nonempty_bounds, png_data_url, render_strokes


def scribble(rng: random.Random, size: tuple[int, int], n_pts: int = 24) -> list[list[float]]:
    """A wobbly closed loop somewhere on the canvas."""
    w, h = size
    cx = rng.uniform(0.3, 0.7) * w
    cy = rng.uniform(0.3, 0.7) * h
    r = rng.uniform(0.08, 0.2) * min(w, h)
    pts: list[list[float]] = []
    for i in range(n_pts + 1):
        a = 2 * math.pi * (i / n_pts)
        rr = r * rng.uniform(0.8, 1.2)
        pts.append([cx + rr * math.cos(a), cy + rr * math.sin(a)])
    return pts


def make_sprite(rng: random.Random, size: tuple[int, int], color: str) -> Sprite:
    img = render_strokes(strokes=[scribble(rng, size)], size=size, color=color)
    x, y, width, height = nonempty_bounds(img)
    return confirm_sprite(png_data_url(img), x=x, y=y, width=width, height=height, rng=rng)


async def send_sprites(
    ws_url: str,
    *,
    count: int,
    interval_s: float,
    size: tuple[int, int],
    color: str,
    binary: bool,
    seed: int | None = None,
) -> None:
    rng = random.Random(seed)
    async with websockets.connect(ws_url, max_size=2**24) as ws:
        for i in range(count):
            wire = make_sprite(rng, size, color).to_wire()
            await ws.send(wire.encode("utf-8") if binary else wire)
            print(f"[send] sprite {i + 1}/{count} ({len(wire)} bytes)")
            if interval_s and i + 1 < count:
                await asyncio.sleep(interval_s)


def main() -> None:
    ap = argparse.ArgumentParser(description="Draw random scribbles and send them to the relay as sprites.")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:8080/")
    ap.add_argument("--count", type=int, default=1)
    ap.add_argument("--interval", type=float, default=1.0, help="Seconds between sprites")
    ap.add_argument("--width", type=int, default=800, help="Canvas width, px")
    ap.add_argument("--height", type=int, default=600, help="Canvas height, px")
    ap.add_argument("--color", default="#000000")
    ap.add_argument("--binary", action="store_true", help="Send binary frames instead of text")
    ap.add_argument("--seed", type=int, default=None)
    args = ap.parse_args()

    asyncio.run(
        send_sprites(
            args.ws,
            count=args.count,
            interval_s=args.interval,
            size=(args.width, args.height),
            color=args.color,
            binary=args.binary,
            seed=args.seed,
        )
    )


if __name__ == "__main__":
    main()
