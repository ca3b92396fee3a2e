# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: cli.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Typer command line interface for the chat server and client.
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from py_chat.client import run_client
from py_chat.config import ServerSettings
from py_chat.logging_config import setup_logging
from py_chat.server import ChatServer, ServerSetupError

app = typer.Typer(help="A multi-client chat broadcast server and client.")
console = Console()
log = structlog.get_logger(__name__)

DEFAULT_SERVER_IP = "127.0.0.1"


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None, help="Hostname or IP address on which the server listens."
    ),
    port: Optional[int] = typer.Option(
        None, help="TCP port on which the server listens."
    ),
    framing: Optional[str] = typer.Option(
        None, help="Message framing: 'raw' (one read per message) or 'line'."
    ),
    log_level: Optional[str] = typer.Option(None, help="Logging level."),
    json_logs: Optional[bool] = typer.Option(
        None, "--json-logs/--console-logs", help="Render logs as JSON."
    ),
):
    """
    Start the chat server, accept client connections, and broadcast messages.
    Press Ctrl+C to stop the server.
    """
    overrides: Dict[str, Any] = {
        "HOST": host,
        "PORT": port,
        "FRAMING": framing,
        "LOG_LEVEL": log_level,
        "LOG_JSON": json_logs,
    }
    try:
        config = ServerSettings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        typer.secho(f"[ERROR] Invalid settings:\n{e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    setup_logging(log_level=config.LOG_LEVEL, json_logs=config.LOG_JSON)
    console.print(
        Panel(
            f"py-chat server on {config.HOST}:{config.PORT} ({config.FRAMING} framing)",
            expand=False,
        )
    )

    server = ChatServer(config)
    try:
        server.start()
    except ServerSetupError as e:
        log.error("Server setup failed", error=str(e))
        raise typer.Exit(code=1)

    try:
        server.serve_forever()
    finally:
        server.close()


@app.command()
def connect(
    host: str = typer.Option(DEFAULT_SERVER_IP, help="IP address of the chat server."),
    port: int = typer.Option(8080, help="Port number of the chat server."),
    framing: str = typer.Option("raw", help="Framing the server was started with."),
):
    """
    Connect to a chat server and exchange messages from the terminal.
    """
    try:
        code = run_client(host, port, framing=framing, console=console)
    except ValueError as e:
        typer.secho(f"[ERROR] {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    if code:
        raise typer.Exit(code=code)


def main():
    """
    Entry point for the ``py-chat`` script and ``python -m py_chat``.
    """
    app()
