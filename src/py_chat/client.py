# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: client.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Minimal terminal chat client with a background receiver thread.
# -----------------------------------------------------------------------------
"""
The main thread reads lines from the user and sends them; a daemon thread
prints whatever the server sends. Both stop once the shared ``running``
event is cleared, either by typing ``quit`` or by the server hanging up.
"""

import socket
import threading
from typing import Callable, Optional

from rich.console import Console

from py_chat.framing import ENCODING, get_framer

QUIT_COMMAND = "quit"


def receive_messages(
    sock: socket.socket, running: threading.Event, console: Console
) -> None:
    """
    Background thread that prints everything received from the server.
    """
    while running.is_set():
        try:
            data = sock.recv(1024)
        except OSError:
            # Socket closed by the input side or the connection dropped
            break
        if not data:
            if running.is_set():
                console.print("\nDisconnected from server", style="bold red")
            break
        console.print(
            data.decode(ENCODING, errors="replace").rstrip("\n"),
            markup=False,
            highlight=False,
        )
    running.clear()


def run_client(
    host: str,
    port: int,
    framing: str = "raw",
    console: Optional[Console] = None,
    input_func: Callable[[], str] = input,
) -> int:
    """
    Connect to a chat server and relay user input until quit or hang-up.

    The first line typed is sent as the username; the server's greeting
    asks for it.

    Returns:
        The process exit code: 0 on a normal exit, 1 if connecting failed.
    """
    console = console or Console()
    framer = get_framer(framing)

    try:
        sock = socket.create_connection((host, port))
    except OSError as e:
        console.print(f"Connection to {host}:{port} failed: {e}", style="bold red")
        return 1

    console.print(f"Connected to {host}:{port}", style="green")
    console.print(f"Start chatting (type '{QUIT_COMMAND}' to exit)", style="green")

    running = threading.Event()
    running.set()
    receiver = threading.Thread(
        target=receive_messages, args=(sock, running, console), daemon=True
    )
    receiver.start()

    try:
        while running.is_set():
            try:
                message = input_func()
            except (EOFError, KeyboardInterrupt):
                break
            if message == QUIT_COMMAND:
                break
            if not message:
                continue
            try:
                sock.sendall(framer.encode(message))
            except OSError as e:
                console.print(f"Send failed: {e}", style="bold red")
                break
    finally:
        running.clear()
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Already disconnected
            pass
        sock.close()
        receiver.join(timeout=1.0)

    console.print("Disconnected.", style="green")
    return 0
