# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: session.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Join, chat and leave handling for a single read event.
# -----------------------------------------------------------------------------
from typing import Callable, Optional

import structlog

from py_chat.broadcast import Broadcaster
from py_chat.framing import Framer
from py_chat.registry import EVERYONE, ConnectionRegistry, Session

log = structlog.get_logger(__name__)

JOIN_TEMPLATE = "{username} has joined the chat!"
LEAVE_TEMPLATE = "{username} has left the chat"
CHAT_TEMPLATE = "{username}: {message}"


def close_session(session: Session) -> None:
    session.sock.close()


class SessionHandler:
    """
    Interprets what one connection sent.

    The first message from a connection is its username; everything after
    that is a chat line. An empty or failed read means the client is gone.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        broadcaster: Broadcaster,
        framer: Framer,
        release: Optional[Callable[[Session], None]] = None,
    ) -> None:
        self.registry = registry
        self.broadcaster = broadcaster
        self.framer = framer
        # Called once per removed session to stop watching and close its socket.
        self.release = release or close_session

    def handle_data(self, conn_id: int, chunk: bytes) -> None:
        session = self.registry.get(conn_id)
        if session is None:
            return
        for message in self.framer.decode(session.pending, chunk):
            if not session.joined:
                self._join(session, message)
            else:
                self._chat(session, message)

    def handle_disconnect(self, conn_id: int) -> bool:
        """
        Remove a connection and announce the departure if it had joined.

        Calling this again for the same connection does nothing.

        Returns:
            True if the connection was tracked and has now been cleaned up.
        """
        session = self.registry.remove(conn_id)
        if session is None:
            return False

        self.release(session)
        if session.pending:
            log.info(
                "Dropped unterminated input",
                conn_id=conn_id,
                dropped_bytes=len(session.pending),
            )

        if session.username is None:
            log.info(
                "Client disconnected before choosing a username",
                conn_id=conn_id,
                address=session.address,
            )
        else:
            log.info("User disconnected", conn_id=conn_id, username=session.username)
            self._broadcast(
                LEAVE_TEMPLATE.format(username=session.username), exclude=EVERYONE
            )
        return True

    def _join(self, session: Session, username: str) -> None:
        self.registry.set_username(session.conn_id, username)
        log.info("User joined", conn_id=session.conn_id, username=username)
        self._broadcast(
            JOIN_TEMPLATE.format(username=username), exclude=session.conn_id
        )

    def _chat(self, session: Session, message: str) -> None:
        log.info("Message", username=session.username, message=message)
        self._broadcast(
            CHAT_TEMPLATE.format(username=session.username, message=message),
            exclude=session.conn_id,
        )

    def _broadcast(self, message: str, exclude: int) -> None:
        result = self.broadcaster.broadcast(message, exclude=exclude)
        # A recipient that took only part of a message cannot be resynced.
        for conn_id in result.failed:
            self.handle_disconnect(conn_id)
