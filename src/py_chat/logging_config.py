# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: logging_config.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Configures structured logging for the chat server using structlog.
# -----------------------------------------------------------------------------
import logging
import sys

import structlog


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Set up structured logging for the entire application.

    structlog processes every log call and hands the rendered line to the
    standard logging library, so third-party loggers end up on the same
    stream. Console rendering is the default; JSON is available for log
    shippers.

    Args:
        log_level: The minimum log level to capture (e.g., "INFO", "DEBUG").
        json_logs: Render each line as a JSON object instead of console text.
    """
    log_level_upper = log_level.upper()
    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=log_level_upper, force=True
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # ConsoleRenderer formats exceptions itself.
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
