# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: config.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Pydantic-based server settings loaded from environment variables.
# -----------------------------------------------------------------------------
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Framing = Literal["raw", "line"]


class ServerSettings(BaseSettings):
    """
    Chat server settings loaded from environment variables.

    Every field can be set with a ``PY_CHAT_`` prefixed variable
    (e.g. ``PY_CHAT_PORT=9000``) or from a ``.env`` file. Values passed to the
    constructor take precedence, which is how the CLI applies its options.
    """

    model_config = SettingsConfigDict(
        env_prefix="PY_CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    HOST: str = Field("0.0.0.0", description="Interface the listener binds to.")
    PORT: int = Field(8080, ge=0, le=65535, description="TCP listening port.")
    BACKLOG: int = Field(5, ge=1, description="Pending connection queue size.")
    BUFFER_SIZE: int = Field(1024, ge=1, description="Maximum bytes per read.")
    FRAMING: Framing = Field("raw", description="Message boundary strategy.")
    SEND_TIMEOUT: float = Field(
        5.0, gt=0, description="Seconds a single recipient may block a send."
    )
    LOG_LEVEL: str = Field("INFO", description="Logging level for the server.")
    LOG_JSON: bool = Field(False, description="Render log lines as JSON.")


settings = ServerSettings()
