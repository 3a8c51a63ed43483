"""
Log sinks: where rendered events end up.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Literal, Protocol

import orjson
from structlog.typing import EventDict

from .formatters import ConsoleFormatter

LogFormat = Literal["console", "json"]


def orjson_dumps(event_dict: EventDict) -> str:
    return orjson.dumps(event_dict, default=str, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


class Sink(Protocol):
    def emit(self, event_dict: EventDict) -> None: ...

    def close(self) -> None: ...


class StdioSink:
    """Write events to a stream as aligned console lines (colored on a TTY) or JSON lines."""

    def __init__(self, fmt: LogFormat = "console", stream: Any = None):
        self._fmt = fmt
        self._stream = stream or sys.stderr

    def emit(self, event_dict: EventDict) -> None:
        if self._fmt == "json":
            line = orjson_dumps(event_dict)
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            line = ConsoleFormatter.format(event_dict, use_color=use_color)
        self._stream.write(line + "\n")
        self._stream.flush()

    def close(self) -> None:
        pass


class FileSink:
    """Append events to a file as JSON lines."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("a", encoding="utf-8")

    def emit(self, event_dict: EventDict) -> None:
        self._file.write(orjson_dumps(event_dict) + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()
