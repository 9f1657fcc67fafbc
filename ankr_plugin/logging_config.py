"""
structlog setup shared by the HTTP service and the CLI.

Every record carries the plugin name, and any value containing the Ankr key
is masked before rendering, since the multichain URL embeds it.
"""

import logging
import sys
from typing import Any, Iterable, Optional

import structlog

from .config import resolve_ankr_api_key, settings

PLUGIN_NAME = "plugin-ankr"
REDACTED = "***"

# httpx request lines include the keyed URL
LIBRARY_LOGGERS = ("httpcore", "httpx", "anthropic")
SERVER_LOGGERS = ("uvicorn.access",)


def _add_plugin_name(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("plugin", PLUGIN_NAME)
    return event_dict


def _redact_api_key(logger: Any, method_name: str, event_dict: dict) -> dict:
    api_key = resolve_ankr_api_key()
    if not api_key:
        return event_dict
    for key, value in event_dict.items():
        if isinstance(value, str) and api_key in value:
            event_dict[key] = value.replace(api_key, REDACTED)
    return event_dict


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    quiet: Iterable[str] = LIBRARY_LOGGERS,
) -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Override for ``settings.log_level``
        log_format: ``json`` or ``console``; defaults to ``settings.log_format``
        quiet: Loggers capped at WARNING
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    renderer = _renderer((log_format or settings.log_format).lower())

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_plugin_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        _redact_api_key,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
