# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: __init__.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: A single-threaded multi-client TCP chat server.
# -----------------------------------------------------------------------------
from py_chat.config import ServerSettings
from py_chat.registry import EVERYONE, ConnectionRegistry, Session
from py_chat.server import ChatServer, ServerSetupError

__version__ = "1.0.0"

__all__ = [
    "EVERYONE",
    "ChatServer",
    "ConnectionRegistry",
    "ServerSettings",
    "ServerSetupError",
    "Session",
]
