# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: registry.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: In-memory registry of live connections and their usernames.
# -----------------------------------------------------------------------------
import itertools
import socket
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

# Broadcast target meaning "exclude nobody".
EVERYONE = -1


class UsernameAlreadySetError(Exception):
    """Raised when a connection that already has a username is given another."""


@dataclass(eq=False)
class Session:
    """
    One live connection and what the server knows about it.

    ``conn_id`` is allocated by the registry and never reused, so a socket
    descriptor recycled by the OS cannot pick up a previous session's state.
    """

    conn_id: int
    sock: socket.socket
    address: Any
    username: Optional[str] = None
    pending: bytearray = field(default_factory=bytearray)

    @property
    def joined(self) -> bool:
        return self.username is not None


class ConnectionRegistry:
    """
    Tracks every open connection from accept until cleanup.

    Sessions are kept in accept order. Iteration always walks a snapshot, so
    removing a session while iterating never skips or repeats another one.
    """

    def __init__(self) -> None:
        self._sessions: Dict[int, Session] = {}
        self._ids = itertools.count(1)

    def add(self, sock: socket.socket, address: Any = None) -> Session:
        session = Session(conn_id=next(self._ids), sock=sock, address=address)
        self._sessions[session.conn_id] = session
        return session

    def remove(self, conn_id: int) -> Optional[Session]:
        """Drop a session; returns it, or ``None`` if it was already gone."""
        return self._sessions.pop(conn_id, None)

    def get(self, conn_id: int) -> Optional[Session]:
        return self._sessions.get(conn_id)

    def set_username(self, conn_id: int, username: str) -> Session:
        session = self._sessions[conn_id]
        if session.username is not None:
            raise UsernameAlreadySetError(
                f"connection {conn_id} is already known as {session.username!r}"
            )
        session.username = username
        return session

    def username_of(self, conn_id: int) -> Optional[str]:
        session = self._sessions.get(conn_id)
        return session.username if session else None

    def sessions(self) -> List[Session]:
        return list(self._sessions.values())

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions())

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, conn_id: object) -> bool:
        return conn_id in self._sessions
