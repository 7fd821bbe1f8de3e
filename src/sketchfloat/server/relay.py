from __future__ import annotations

import asyncio
import logging

from starlette.websockets import WebSocketDisconnect

from .registry import Connection, ConnectionRegistry, Payload

logger = logging.getLogger(__name__)


class BroadcastRelay:
    """
    Fan-out policy: every frame from one connection goes, unchanged, to every
    other open connection in the registry.

    The relay never looks inside the payload. A recipient that does not take a
    frame within `send_timeout_s` is treated like a failed send.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        *,
        send_timeout_s: float = 5.0,
        debug_log_msgs: bool = False,
    ) -> None:
        self.registry = registry
        self.send_timeout_s = send_timeout_s
        self.debug_log_msgs = debug_log_msgs

    async def on_message(self, sender: Connection, payload: Payload) -> int:
        """Forward `payload` to all open connections except `sender`; return the delivery count."""
        targets = [c for c in self.registry.snapshot() if c.id != sender.id and c.is_open()]
        if not targets:
            return 0

        results = await asyncio.gather(*(self._safe_send(c, payload) for c in targets))
        delivered = sum(results)
        if self.debug_log_msgs:
            kind = "bytes" if isinstance(payload, bytes) else "text"
            logger.info(
                "relayed %s[%d] from %s to %d/%d clients",
                kind,
                len(payload),
                sender.id,
                delivered,
                len(targets),
            )
        return delivered

    async def _safe_send(self, conn: Connection, payload: Payload) -> bool:
        try:
            await asyncio.wait_for(conn.send(payload), timeout=self.send_timeout_s)
        except asyncio.TimeoutError:
            # Recipient stopped reading.
            logger.warning("send to %s timed out after %.1fs", conn.id, self.send_timeout_s)
        except (WebSocketDisconnect, ConnectionError, RuntimeError) as e:
            # Recipient went away between snapshot and send.
            logger.warning("send to %s failed: %r", conn.id, e)
        except Exception:
            logger.exception("unexpected error sending to %s", conn.id)
        else:
            return True
        conn.mark_closed()
        self.registry.unregister(conn)
        return False
