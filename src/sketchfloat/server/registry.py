from __future__ import annotations

import enum
import logging
import threading
import uuid
from dataclasses import dataclass, field

from fastapi import WebSocket

logger = logging.getLogger(__name__)

Payload = str | bytes


class ConnectionState(enum.Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class Connection:
    """
    One client WebSocket plus the bookkeeping the relay needs.

    Identity is `id`, not the websocket object: two `Connection`s are the same
    connection iff their ids match.
    """

    websocket: WebSocket
    id: str = field(default_factory=_new_id)
    state: ConnectionState = ConnectionState.CONNECTING
    remote: str | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def is_open(self) -> bool:
        return self.state is ConnectionState.OPEN

    def mark_open(self) -> None:
        if self.state is ConnectionState.CLOSED:
            raise RuntimeError(f"connection {self.id} is closed and cannot reopen")
        self.state = ConnectionState.OPEN

    def mark_closed(self) -> None:
        self.state = ConnectionState.CLOSED

    async def send(self, payload: Payload) -> None:
        # Always a binary frame: browser clients read `event.data` as a Blob.
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        await self.websocket.send_bytes(payload)


class ConnectionRegistry:
    """
    The set of currently open connections, keyed by connection id.

    Every read and write goes through one `threading.Lock`, so the registry
    stays consistent whether connection events arrive on one event loop or
    on several threads. Broadcasts iterate over `snapshot()`, never over the
    live mapping.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._conns: dict[str, Connection] = {}

    def register(self, conn: Connection) -> None:
        with self._lock:
            if conn.id in self._conns:
                logger.warning("connection %s registered twice; keeping a single entry", conn.id)
            self._conns[conn.id] = conn
            n = len(self._conns)
        logger.debug("registered %s (%d open)", conn.id, n)

    def unregister(self, conn: Connection) -> bool:
        with self._lock:
            removed = self._conns.pop(conn.id, None) is not None
            n = len(self._conns)
        if removed:
            logger.debug("unregistered %s (%d open)", conn.id, n)
        return removed

    def snapshot(self) -> tuple[Connection, ...]:
        with self._lock:
            return tuple(self._conns.values())

    def get(self, conn_id: str) -> Connection | None:
        with self._lock:
            return self._conns.get(conn_id)

    def __contains__(self, conn: object) -> bool:
        if not isinstance(conn, Connection):
            return False
        with self._lock:
            return conn.id in self._conns

    def __len__(self) -> int:
        with self._lock:
            return len(self._conns)
