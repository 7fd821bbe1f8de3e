"""
Shared fixtures: a fresh registry and mocked WebSocket connections.
"""

import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import WebSocket

from sketchfloat.server.registry import Connection, ConnectionRegistry


def mock_websocket() -> MagicMock:
    ws = MagicMock(spec=WebSocket)
    ws.send_text = AsyncMock()
    ws.send_bytes = AsyncMock()
    return ws


def wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll until `predicate()` is true; connection events land on the server loop asynchronously."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(0.01)
    raise AssertionError("condition not met within timeout")


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def open_conn(registry):
    """Factory: build an OPEN connection over a mocked websocket and register it."""

    def _make(register: bool = True) -> Connection:
        conn = Connection(mock_websocket())
        conn.mark_open()
        if register:
            registry.register(conn)
        return conn

    return _make
