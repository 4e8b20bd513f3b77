"""
Log setup for the merchant service.

Every line is one JSON object (or a console line with LOG_FORMAT=console)
keyed by event_type, with the request_id bound by the HTTP middleware and a
shortened account_id where an account is involved. Secret seeds are dropped
before rendering.

Imported by every other module, so it depends on structlog alone.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

# Keys that may carry a secret seed; dropped before rendering
SECRET_KEYS = frozenset({"secret_key", "source_secret", "secretKey", "sourceSecret", "seed"})


def _level_from_env() -> int:
    name = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def _drop_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in SECRET_KEYS.intersection(event_dict):
        del event_dict[key]
    return event_dict


def _stamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """UTC ISO 8601 timestamp unless the caller passed one."""
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's positional `event` becomes event_type; message mirrors it when absent."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "event_type" in event_dict:
        event_dict.setdefault("message", str(event_dict["event_type"]))
    return event_dict


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.processors.JSONRenderer()


def short_account(public_key: str | None) -> str:
    """GABCDE...WXYZ: enough of an account id to correlate log lines."""
    if not public_key:
        return ""
    if len(public_key) <= 12:
        return public_key
    return f"{public_key[:6]}...{public_key[-4:]}"


def configure_structlog(log_format: str | None = None, level: int | None = None) -> None:
    """
    Install the processor chain. Format and level default to LOG_FORMAT
    (json | console) and LOG_LEVEL.
    """
    fmt = (log_format or os.getenv("LOG_FORMAT") or "json").strip().lower()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _drop_secrets,
            _stamp,
            _event_type,
            _renderer(fmt),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level or _level_from_env()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Logger for a module, with `logger` bound to its name.

        logger = get_logger(__name__)
        logger.info("horizon_response", path="/accounts/G...", status=200)
        -> {"event_type": "horizon_response", "path": ..., "status": 200,
            "logger": "stellar_merchant.horizon.client", "level": "info", "timestamp": ...}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_account(public_key: str, name: str = "stellar_merchant") -> structlog.BoundLogger:
    """get_logger(name) with the shortened account_id attached to every line."""
    return get_logger(name).bind(account_id=short_account(public_key))
