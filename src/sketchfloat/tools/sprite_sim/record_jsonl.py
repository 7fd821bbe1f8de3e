from __future__ import annotations

import argparse
import asyncio
import base64
import json
import time
from pathlib import Path

import websockets


def _now_ms() -> int:
    return int(time.time() * 1000)


def record_line(raw: str | bytes) -> str:
    """One JSONL line per relayed frame; binary frames are kept as base64 so replay can restore them."""
    if isinstance(raw, bytes):
        entry = {"ts": _now_ms(), "bin": base64.b64encode(raw).decode("ascii")}
    else:
        entry = {"ts": _now_ms(), "raw": raw}
    return json.dumps(entry, ensure_ascii=False) + "\n"


async def record(ws_url: str, out_path: Path, *, echo: bool) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("a", encoding="utf-8") as f:
        async with websockets.connect(ws_url, max_size=2**24) as ws:
            while True:
                raw = await ws.recv()
                if echo:
                    kind = "bytes" if isinstance(raw, bytes) else "text"
                    print(f"[record] {kind}[{len(raw)}]")
                f.write(record_line(raw))
                f.flush()


def main() -> None:
    ap = argparse.ArgumentParser(description="Record relay traffic to a JSONL file.")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:8080/")
    ap.add_argument("--out", required=True, help="Output JSONL path")
    ap.add_argument("--print", action="store_true", help="Print a line per received frame")
    args = ap.parse_args()

    asyncio.run(record(args.ws, Path(args.out), echo=args.print))


if __name__ == "__main__":
    main()
