from __future__ import annotations

import argparse
import asyncio
import base64
import json
from pathlib import Path

import websockets


def load_events(jsonl_path: Path) -> list[tuple[int | None, str | bytes]]:
    """
    Read recorded frames back as (ts, payload) pairs.

    Accepted line formats:
      - record_jsonl.py output: {"ts": <ms>, "raw": "<text frame>"} or {"ts": <ms>, "bin": "<base64>"}
      - a bare sprite object per line: {"src": ..., "x": ..., ...} (sent as compact JSON text)
    """
    events: list[tuple[int | None, str | bytes]] = []
    for line in jsonl_path.read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        obj = json.loads(line)
        if not isinstance(obj, dict):
            continue
        ts = obj.get("ts")
        ts = int(ts) if isinstance(ts, (int, float)) else None
        if isinstance(obj.get("raw"), str):
            events.append((ts, obj["raw"]))
        elif isinstance(obj.get("bin"), str):
            events.append((ts, base64.b64decode(obj["bin"])))
        else:
            events.append((None, json.dumps(obj, ensure_ascii=False, separators=(",", ":"))))
    return events


async def replay(
    ws_url: str,
    jsonl_path: Path,
    *,
    speed: float = 1.0,
    default_dt_ms: int = 0,
) -> None:
    """Replay previously-recorded frames into the relay, keeping their original spacing."""
    events = load_events(jsonl_path)

    async with websockets.connect(ws_url, max_size=2**24) as ws:
        prev_ts: int | None = None
        for ts, payload in events:
            if ts is not None and prev_ts is not None:
                dt_ms = max(0, ts - prev_ts)
            else:
                dt_ms = default_dt_ms

            prev_ts = ts if ts is not None else prev_ts
            if dt_ms:
                await asyncio.sleep((dt_ms / 1000.0) / max(0.01, speed))

            await ws.send(payload)


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay recorded JSONL frames into the relay.")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:8080/")
    ap.add_argument("--in", dest="inp", required=True, help="Input JSONL path")
    ap.add_argument("--speed", type=float, default=1.0, help="Speed multiplier (2.0 = 2x faster)")
    ap.add_argument("--default-dt-ms", type=int, default=0, help="Delay between messages if no timestamps")
    args = ap.parse_args()

    asyncio.run(
        replay(
            args.ws,
            Path(args.inp),
            speed=args.speed,
            default_dt_ms=args.default_dt_ms,
        )
    )


if __name__ == "__main__":
    main()
