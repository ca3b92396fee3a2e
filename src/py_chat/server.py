# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: server.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Single-threaded multi-client chat server built on selectors.
# -----------------------------------------------------------------------------
"""
The server watches the listening socket and every client socket with one
selector and handles whichever is ready, one event at a time. Because only
the loop thread touches the registry, no locks are needed, and every
broadcast caused by an event is fully sent before the next event runs.
"""

import selectors
import socket
from typing import Optional, Tuple

import structlog

from py_chat.broadcast import Broadcaster
from py_chat.config import ServerSettings, settings
from py_chat.framing import ENCODING, get_framer
from py_chat.registry import ConnectionRegistry, Session
from py_chat.session import SessionHandler

log = structlog.get_logger(__name__)

GREETING = "Enter your username: "

# Selector key markers for the two non-client sockets.
_LISTENER = object()
_WAKEUP = object()


class ServerSetupError(Exception):
    """The listening socket could not be created, bound or put in listen mode."""


class ChatServer:
    """
    Multi-client chat broadcast server.

    Usage::

        server = ChatServer(ServerSettings(PORT=9000))
        server.start()
        server.serve_forever()
    """

    def __init__(self, config: Optional[ServerSettings] = None) -> None:
        self.config = config or settings
        self.framer = get_framer(self.config.FRAMING)
        self.registry = ConnectionRegistry()
        self.broadcaster = Broadcaster(self.registry, self.framer)
        self.handler = SessionHandler(
            self.registry, self.broadcaster, self.framer, release=self._release
        )
        self._selector: Optional[selectors.BaseSelector] = None
        self._listener: Optional[socket.socket] = None
        self._wake_recv: Optional[socket.socket] = None
        self._wake_send: Optional[socket.socket] = None
        self._stopping = False

    # ------------------------------------------------------------------
    # Setup and teardown
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Bind the listener and register it with a fresh selector."""
        host, port = self.config.HOST, self.config.PORT
        try:
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as e:
            raise ServerSetupError(f"Socket creation failed: {e}") from e
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((host, port))
            listener.listen(self.config.BACKLOG)
            listener.setblocking(False)
        except OSError as e:
            listener.close()
            raise ServerSetupError(f"Could not listen on {host}:{port}: {e}") from e

        self._wake_recv, self._wake_send = socket.socketpair()
        self._wake_recv.setblocking(False)

        self._selector = selectors.DefaultSelector()
        self._selector.register(listener, selectors.EVENT_READ, _LISTENER)
        self._selector.register(self._wake_recv, selectors.EVENT_READ, _WAKEUP)
        self._listener = listener
        self._stopping = False

        bound_host, bound_port = self.address
        log.info(
            "Server listening",
            host=bound_host,
            port=bound_port,
            framing=self.framer.name,
        )

    @property
    def address(self) -> Tuple[str, int]:
        if self._listener is None:
            raise RuntimeError("Server has not been started")
        return self._listener.getsockname()

    def close(self) -> None:
        """Close every client connection, the listener and the selector."""
        for session in self.registry.sessions():
            self.registry.remove(session.conn_id)
            self._release(session)
        if self._selector is not None:
            self._selector.close()
            self._selector = None
        for sock in (self._listener, self._wake_recv, self._wake_send):
            if sock is not None:
                sock.close()
        self._listener = self._wake_recv = self._wake_send = None
        log.info("Server socket closed")

    def __enter__(self) -> "ChatServer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------
    def serve_forever(self) -> None:
        """
        Run the event loop until ``stop()`` is called or Ctrl+C is pressed.
        """
        if self._selector is None:
            self.start()
        try:
            while not self._stopping:
                self.poll()
        except KeyboardInterrupt:
            log.info("Ctrl+C detected. Initiating shutdown...")

    def stop(self) -> None:
        """Ask ``serve_forever`` to return. Safe to call from another thread."""
        self._stopping = True
        if self._wake_send is not None:
            try:
                self._wake_send.send(b"\0")
            except OSError as e:
                log.debug("Wake-up send failed", error=str(e))

    def poll(self, timeout: Optional[float] = None) -> int:
        """
        Wait for readiness once and handle every ready socket.

        Args:
            timeout: Seconds to wait, or ``None`` to block until something
                is ready.

        Returns:
            The number of events handled.
        """
        if self._selector is None:
            raise RuntimeError("Server has not been started")
        try:
            events = self._selector.select(timeout)
        except OSError as e:
            log.error("Select error", error=str(e))
            return 0

        for key, _mask in events:
            if key.data is _LISTENER:
                self._accept()
            elif key.data is _WAKEUP:
                self._drain_wakeup()
            else:
                self._read(key.data)
        return len(events)

    def _accept(self) -> None:
        try:
            client_sock, addr = self._listener.accept()
        except (BlockingIOError, InterruptedError) as e:
            # Another wakeup already took the pending connection.
            log.debug("Accept found no pending connection", error=str(e))
            return
        except OSError as e:
            log.warning("Accept failed", error=str(e))
            return

        client_sock.settimeout(self.config.SEND_TIMEOUT)
        session = self.registry.add(client_sock, addr)
        self._selector.register(client_sock, selectors.EVENT_READ, session.conn_id)
        log.info("New client connected", conn_id=session.conn_id, address=addr)

        try:
            client_sock.sendall(GREETING.encode(ENCODING))
        except OSError as e:
            log.warning(
                "Could not send greeting", conn_id=session.conn_id, error=str(e)
            )

    def _read(self, conn_id: int) -> None:
        session = self.registry.get(conn_id)
        if session is None:
            return
        try:
            chunk = session.sock.recv(self.config.BUFFER_SIZE)
        except OSError as e:
            log.warning("Read failed", conn_id=conn_id, error=str(e))
            chunk = b""

        if not chunk:
            self.handler.handle_disconnect(conn_id)
        else:
            self.handler.handle_data(conn_id, chunk)

    def _drain_wakeup(self) -> None:
        try:
            while self._wake_recv.recv(1024):
                pass
        except BlockingIOError:
            pass

    def _release(self, session: Session) -> None:
        if self._selector is not None:
            self._selector.unregister(session.sock)
        session.sock.close()
