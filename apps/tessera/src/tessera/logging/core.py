"""
Core logging configuration.

Importing tessera never configures structlog. Loggers returned by
`get_logger` follow whatever configuration the host application installs;
`configure_logging` / `configure_from_settings` are opt-in for hosts that
want tessera's sinks.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import ConsoleFormatter
from .sinks import FileSink, LogFormat, Sink, StdioSink

_sinks: list[Sink] = []


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["logger"] = event_dict.pop("_name", "root")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def multi_sink_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render log to all configured sinks. Returns empty to suppress default output."""
    for sink in _sinks:
        try:
            sink.emit(event_dict)
        except Exception:
            pass  # a broken sink must not break the caller
    return ""


# =============================================================================
# Configuration
# =============================================================================


def close_sinks() -> None:
    for sink in _sinks:
        sink.close()
    _sinks.clear()


def configure_logging(
    *,
    level: str = "INFO",
    sinks: str = "stdio",
    fmt: str = "console",
    file_path: str = "logs/tessera.log",
    stream: Any = None,
) -> None:
    """
    Install tessera's structlog pipeline process-wide.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        sinks: Comma-separated sink names (stdio, file)
        fmt: Output format for stdio sink (console, json)
        file_path: Path for file sink
        stream: Stream for the stdio sink (default: stderr)
    """
    close_sinks()
    log_format: LogFormat = "json" if str(getattr(fmt, "value", fmt)).lower() == "json" else "console"
    for name in (s.strip().lower() for s in sinks.split(",")):
        if name == "stdio":
            _sinks.append(StdioSink(fmt=log_format, stream=stream))
        elif name == "file":
            _sinks.append(FileSink(file_path))

    level_name = str(getattr(level, "value", level)).upper()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            add_timestamp,
            add_logger_name,
            rename_event_key,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            multi_sink_renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_from_settings(stream: Any = None) -> None:
    """`configure_logging` driven by `settings.logging` (TESSERA_LOG_* variables)."""
    from tessera.config import settings

    log_settings = settings.logging
    ConsoleFormatter.configure(
        timestamp_format=log_settings.console_timestamp_format,
        level_width=log_settings.console_level_width,
        logger_width=log_settings.console_logger_width,
        separator=log_settings.console_separator,
    )
    configure_logging(
        level=log_settings.level.value,
        sinks=log_settings.sinks,
        fmt=log_settings.format.value,
        file_path=log_settings.file_path,
        stream=stream,
    )
