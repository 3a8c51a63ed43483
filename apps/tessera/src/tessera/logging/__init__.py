"""
Structured logging for tessera.

Sinks:
- stdio: console columns or JSON lines
- file: JSON lines appended to a file

Library: structlog + orjson.
"""

from .core import close_sinks, configure_from_settings, configure_logging, get_logger

__all__ = ["configure_logging", "configure_from_settings", "close_sinks", "get_logger"]
