# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: broadcast.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Fan-out of one chat message to every tracked connection.
# -----------------------------------------------------------------------------
from typing import List, NamedTuple

import structlog

from py_chat.framing import Framer
from py_chat.registry import EVERYONE, ConnectionRegistry

log = structlog.get_logger(__name__)


class BroadcastResult(NamedTuple):
    delivered: int
    failed: List[int]


class Broadcaster:
    """Sends messages to the connections held by a registry."""

    def __init__(self, registry: ConnectionRegistry, framer: Framer) -> None:
        self.registry = registry
        self.framer = framer

    def broadcast(self, message: str, exclude: int = EVERYONE) -> BroadcastResult:
        """
        Send ``message`` to every connection except ``exclude``.

        A recipient whose send fails is logged and skipped. Its id is
        reported back so the caller can drop it once the fan-out is done;
        a partly written message has left its stream unusable.

        Args:
            message: Text to deliver.
            exclude: Connection id to leave out, or ``EVERYONE`` for none.

        Returns:
            How many recipients got the message and the ids whose send failed.
        """
        payload = self.framer.encode(message)
        delivered = 0
        failed = []
        for session in self.registry:
            if session.conn_id == exclude:
                continue
            try:
                session.sock.sendall(payload)
            except OSError as e:
                log.warning(
                    "Broadcast send failed",
                    conn_id=session.conn_id,
                    username=session.username,
                    error=str(e),
                )
                failed.append(session.conn_id)
                continue
            delivered += 1
        return BroadcastResult(delivered, failed)
