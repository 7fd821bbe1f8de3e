from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from sketchfloat.protocol.constants import WS_PATH

from .config import Settings, get_settings
from .registry import Connection, ConnectionRegistry
from .relay import BroadcastRelay
from .viewer_page import render_viewer_html

logger = logging.getLogger(__name__)


def _peer(ws: WebSocket) -> str | None:
    client = ws.client
    return f"{client.host}:{client.port}" if client else None


async def serve_connection(ws: WebSocket, registry: ConnectionRegistry, relay: BroadcastRelay) -> None:
    """Drive one client through CONNECTING -> OPEN -> CLOSED, relaying every frame it sends."""
    conn = Connection(ws, remote=_peer(ws))
    try:
        await ws.accept()
    except Exception:
        # Never reached OPEN, so never registered.
        logger.warning("handshake with %s failed", conn.remote, exc_info=True)
        conn.mark_closed()
        return

    conn.mark_open()
    registry.register(conn)
    logger.info("client connected: %s from %s (%d open)", conn.id, conn.remote, len(registry))

    try:
        while True:
            msg = await ws.receive()
            if msg["type"] == "websocket.disconnect":
                break
            payload = msg.get("bytes")
            if payload is None:
                payload = msg.get("text")
            if payload is None:
                continue
            await relay.on_message(conn, payload)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("connection %s dropped after an unexpected error", conn.id)
    finally:
        conn.mark_closed()
        registry.unregister(conn)
        logger.info("client disconnected: %s (%d open)", conn.id, len(registry))


def create_app(settings: Settings | None = None, registry: ConnectionRegistry | None = None) -> FastAPI:
    settings = settings or get_settings()
    if registry is None:
        registry = ConnectionRegistry()
    relay = BroadcastRelay(
        registry,
        send_timeout_s=settings.send_timeout_s,
        debug_log_msgs=settings.debug_log_msgs,
    )

    app = FastAPI(title="sketchfloat relay")
    app.state.settings = settings
    app.state.registry = registry
    app.state.relay = relay

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "connections": len(registry)}

    @app.get("/viewer", response_class=HTMLResponse)
    def viewer():
        # Minimal debug viewer: animates whatever sprites pass through the relay.
        return HTMLResponse(render_viewer_html(WS_PATH))

    @app.websocket(WS_PATH)
    async def ws(websocket: WebSocket):
        await serve_connection(websocket, registry, relay)

    # Mounted last: routes above win over same-path static files.
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info("static dir %s not found; serving relay only", static_dir)

    return app


app = create_app()
