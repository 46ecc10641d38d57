"""
structlog setup shared by the client and anything embedding it.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", fmt: str = "json"):
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
        fmt: "json" for one JSON object per line, "console" for the
             human readable renderer.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, str(level).upper(), logging.INFO),
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from(config):
    """Configure logging from a Config instance's logging section."""
    log_config = config.logging or {}
    configure_logging(
        level=log_config.get('level', 'INFO'),
        fmt=log_config.get('format', 'json'),
    )
