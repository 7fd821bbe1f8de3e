"""
End-to-end tests: real WebSocket sessions against the FastAPI app via TestClient.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from sketchfloat.server.app import create_app, serve_connection
from sketchfloat.server.config import Settings
from sketchfloat.server.registry import Connection, ConnectionRegistry
from sketchfloat.server.relay import BroadcastRelay

from .conftest import mock_websocket, wait_until


@pytest.fixture
def settings(tmp_path):
    return Settings(static_dir=str(tmp_path / "no-such-dir"))


@pytest.fixture
def app_registry():
    return ConnectionRegistry()


@pytest.fixture
def client(settings, app_registry):
    app = create_app(settings, registry=app_registry)
    with TestClient(app) as c:
        yield c


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "connections": 0}


def test_healthz_counts_connections(client, app_registry):
    with client.websocket_connect("/"), client.websocket_connect("/"):
        wait_until(lambda: len(app_registry) == 2)
        assert client.get("/healthz").json()["connections"] == 2
    wait_until(lambda: len(app_registry) == 0)


def test_viewer_page(client):
    resp = client.get("/viewer")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "sketchfloat viewer" in resp.text
    assert "const wsPath = \"/\";" in resp.text


def test_three_clients_scenario(client, app_registry):
    with (
        client.websocket_connect("/") as a,
        client.websocket_connect("/") as b,
        client.websocket_connect("/") as c,
    ):
        wait_until(lambda: len(app_registry) == 3)

        a.send_text("P1")
        assert b.receive_bytes() == b"P1"
        assert c.receive_bytes() == b"P1"

        # If A had been sent its own P1 it would be queued ahead of this.
        b.send_text("marker")
        assert a.receive_bytes() == b"marker"
        assert c.receive_bytes() == b"marker"


def test_binary_frames(client, app_registry):
    payload = bytes(range(256))
    with client.websocket_connect("/") as a, client.websocket_connect("/") as b:
        wait_until(lambda: len(app_registry) == 2)
        a.send_bytes(payload)
        assert b.receive_bytes() == payload


def test_sender_order_is_preserved(client, app_registry):
    with client.websocket_connect("/") as a, client.websocket_connect("/") as b:
        wait_until(lambda: len(app_registry) == 2)
        a.send_text("P1")
        a.send_text("P2")
        assert b.receive_bytes() == b"P1"
        assert b.receive_bytes() == b"P2"


def test_closed_client_gets_no_delivery(client, app_registry, monkeypatch):
    sent_to: list[str] = []
    original_send = Connection.send

    async def recording_send(self, payload):
        sent_to.append(self.id)
        await original_send(self, payload)

    monkeypatch.setattr(Connection, "send", recording_send)

    with client.websocket_connect("/") as a:
        with client.websocket_connect("/"):
            wait_until(lambda: len(app_registry) == 2)
            both = {c.id for c in app_registry.snapshot()}
        wait_until(lambda: len(app_registry) == 1)
        (b_id,) = both - {c.id for c in app_registry.snapshot()}

        # Nobody left to receive; A must not see an error.
        a.send_text("P2")

        with client.websocket_connect("/") as c:
            wait_until(lambda: len(app_registry) == 2)
            a.send_text("P3")
            got = c.receive_bytes()
            if got == b"P2":
                # late joiner may catch the earlier frame if it was still in flight
                got = c.receive_bytes()
            assert got == b"P3"
        wait_until(lambda: len(app_registry) == 1)

    assert b_id not in sent_to
    assert sent_to


def test_static_assets_and_relay_share_the_root(tmp_path):
    (tmp_path / "index.html").write_text("<h1>draw here</h1>", encoding="utf-8")
    registry = ConnectionRegistry()
    app = create_app(Settings(static_dir=str(tmp_path)), registry=registry)

    with TestClient(app) as client:
        resp = client.get("/")
        assert resp.status_code == 200
        assert "draw here" in resp.text
        assert client.get("/healthz").status_code == 200

        with client.websocket_connect("/") as a, client.websocket_connect("/") as b:
            wait_until(lambda: len(registry) == 2)
            a.send_text("over static")
            assert b.receive_bytes() == b"over static"


def test_create_app_builds_its_own_registry(settings):
    app = create_app(settings)
    assert isinstance(app.state.registry, ConnectionRegistry)
    assert app.state.relay.registry is app.state.registry


def test_text_sprite_arrives_as_binary_frame(client, app_registry):
    # Browser clients send JSON text and read the relayed frame as a Blob.
    sprite = '{"src":"data:image/png;base64,AA","x":1,"y":2,"width":3,"height":4,"vx":0.5,"vy":-0.5}'
    with client.websocket_connect("/") as a, client.websocket_connect("/") as b:
        wait_until(lambda: len(app_registry) == 2)
        a.send_text(sprite)
        msg = b.receive()
        assert msg.get("bytes") == sprite.encode("utf-8")
        assert msg.get("text") is None


@pytest.mark.asyncio
async def test_failed_handshake_is_never_registered(registry):
    ws = mock_websocket()
    ws.accept = AsyncMock(side_effect=RuntimeError("handshake rejected"))
    ws.receive = AsyncMock()

    await serve_connection(ws, registry, BroadcastRelay(registry))

    assert len(registry) == 0
    ws.receive.assert_not_called()
