# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: framing.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Message boundary strategies for the chat byte stream.
# -----------------------------------------------------------------------------
"""
Two framings are supported:

``raw``
    One ``recv()`` is one message and outbound text is sent as-is. This is
    the reference behavior. TCP is free to coalesce or split writes, so two
    quick sends from a client can arrive as a single message.

``line``
    Newline-delimited text. Partial lines are buffered per connection until
    the terminator arrives and outbound messages end with ``\\n``.
"""

from abc import ABC, abstractmethod
from typing import Dict, List

ENCODING = "utf-8"


class Framer(ABC):
    """Base class: turns received chunks into messages and messages into bytes."""

    name = ""

    @abstractmethod
    def decode(self, pending: bytearray, chunk: bytes) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def encode(self, message: str) -> bytes:
        raise NotImplementedError


class RawFramer(Framer):
    name = "raw"

    def decode(self, pending: bytearray, chunk: bytes) -> List[str]:
        return [chunk.decode(ENCODING, errors="replace")]

    def encode(self, message: str) -> bytes:
        return message.encode(ENCODING)


class LineFramer(Framer):
    name = "line"

    def decode(self, pending: bytearray, chunk: bytes) -> List[str]:
        """
        Append ``chunk`` to ``pending`` and pop every complete line.

        The unterminated tail stays in ``pending`` for the next read. Blank
        lines are dropped and a trailing ``\\r`` is stripped.
        """
        pending.extend(chunk)
        messages = []
        while True:
            index = pending.find(b"\n")
            if index < 0:
                break
            line = bytes(pending[:index]).rstrip(b"\r")
            del pending[: index + 1]
            if line:
                messages.append(line.decode(ENCODING, errors="replace"))
        return messages

    def encode(self, message: str) -> bytes:
        return (message + "\n").encode(ENCODING)


FRAMERS: Dict[str, Framer] = {
    RawFramer.name: RawFramer(),
    LineFramer.name: LineFramer(),
}


def get_framer(name: str) -> Framer:
    """Look up a framer by name, raising ``ValueError`` for unknown names."""
    try:
        return FRAMERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown framing {name!r}; expected one of {sorted(FRAMERS)}"
        ) from None
