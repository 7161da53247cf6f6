"""Websocket channel to the game server.

• WebSocketChannel.connect() – open the socket (one attempt, no retry)
• send()                     – frame + send one message, False when dropped
• frames()                   – yield decoded inbound frames until close

A send on a closed channel is dropped, not queued: the game core treats a
lost connection as the end of that action and nothing more.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from websockets.exceptions import ConnectionClosed
from websockets.sync.client import ClientConnection, connect

from . import config as _cfg
from .protocol import FrameError, pack, unpack

logger = logging.getLogger(__name__)


class WebSocketChannel:
    """Ordered, message-framed duplex stream over one websocket."""

    def __init__(self, conn: ClientConnection) -> None:
        self._conn = conn
        self._open = True

    @classmethod
    def connect(cls, url: str = _cfg.DEFAULT_URL, *, open_timeout: float = _cfg.OPEN_TIMEOUT) -> "WebSocketChannel":
        logger.debug("connect() – url=%s timeout=%.1f", url, open_timeout)
        conn = connect(url, open_timeout=open_timeout)
        logger.info("Connected to server at %s", url)
        return cls(conn)

    @property
    def is_open(self) -> bool:
        return self._open

    def send(self, obj: Any) -> bool:
        if not self._open:
            logger.debug("send() on closed channel – dropping %r", obj)
            return False
        logger.debug("send() – obj=%r", obj)
        try:
            self._conn.send(pack(obj))
            return True
        except (ConnectionClosed, OSError) as exc:
            logger.warning("send() failed: %s", exc)
            self._open = False
            return False

    def frames(self) -> Iterator[Any]:
        """Yield decoded frames in delivery order; stops when the socket closes."""
        try:
            for raw in self._conn:
                try:
                    obj = unpack(raw)
                except FrameError as exc:
                    logger.warning("recv frame error: %s", exc)
                    continue
                logger.debug("recv – obj=%r", obj)
                yield obj
        except ConnectionClosed as exc:
            logger.debug("connection closed: %s", exc)
        finally:
            self._open = False

    def close(self) -> None:
        self._open = False
        self._conn.close()
