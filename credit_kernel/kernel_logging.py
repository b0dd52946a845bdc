"""
Structured logging for the credit score kernel.

structlog with ISO timestamps, log level and an ``event_type`` key. DEBUG=true
lowers the level to debug; LOG_FORMAT=json switches to JSON lines.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

import structlog

from credit_kernel.config import settings


def _add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_logging(debug: bool = False, log_format: str = "console") -> None:
    level = logging.DEBUG if debug else logging.INFO
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        _add_timestamp,
    ]
    if log_format.strip().lower() == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(_normalize_event)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "credit_kernel"):
    return structlog.get_logger(name)


if not structlog.is_configured():
    configure_logging(debug=settings.DEBUG, log_format=settings.LOG_FORMAT)
