"""structlog setup shared by the server, the pipeline and the CLI scripts."""

from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping

import structlog

# Event keys whose values must never reach the log stream.
SECRET_KEYS = frozenset(
    {
        "salvato_client_id",
        "salvato_client_secret",
        "dropbox_access_token",
        "plumsail_api_key",
        "token",
        "authorization",
    }
)


def mask_secrets(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace credential values with a presence marker."""

    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "***" if event_dict[key] else "missing"
    return event_dict


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger, configuring the stack on first use."""

    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)


def configure_logging(level: str = "INFO") -> None:
    """Emit JSON lines on stderr; stdout stays free for CLI results."""

    level_no = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            mask_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level_no, format="%(message)s", stream=sys.stderr)
