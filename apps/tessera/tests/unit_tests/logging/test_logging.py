"""
结构化日志单元测试
"""

from __future__ import annotations

import io
import os
import subprocess
import sys
from pathlib import Path

import orjson
import pytest
import structlog

import tessera
from tessera.config import Settings
from tessera.logging import close_sinks, configure_from_settings, configure_logging, get_logger
from tessera.logging.formatters import ConsoleFormatter
from tessera.logging.sinks import FileSink, StdioSink


@pytest.fixture(autouse=True)
def _restore(restore_logging):
    yield


class TestConfigureLogging:
    """configure_logging 测试"""

    def test_json_stdio_sink(self) -> None:
        stream = io.StringIO()
        configure_logging(level="INFO", sinks="stdio", fmt="json", stream=stream)

        get_logger("tessera.test").info("token_rejected", code="INVALID_SIGNATURE")

        event = orjson.loads(stream.getvalue().splitlines()[-1])
        assert event["message"] == "token_rejected"
        assert event["logger"] == "tessera.test"
        assert event["level"] == "info"
        assert event["code"] == "INVALID_SIGNATURE"
        assert "timestamp" in event

    def test_level_filtering(self) -> None:
        stream = io.StringIO()
        configure_logging(level="WARNING", sinks="stdio", fmt="json", stream=stream)

        logger = get_logger("tessera.test")
        logger.info("hidden")
        logger.warning("shown")

        messages = [orjson.loads(line)["message"] for line in stream.getvalue().splitlines()]
        assert messages == ["shown"]

    def test_file_sink(self, tmp_path) -> None:
        path = tmp_path / "logs" / "tessera.log"
        configure_logging(level="DEBUG", sinks="file", file_path=str(path))

        get_logger("tessera.test").debug("token_created", length=42)
        close_sinks()

        event = orjson.loads(path.read_text(encoding="utf-8").splitlines()[-1])
        assert (event["message"], event["length"]) == ("token_created", 42)

    def test_unknown_sinks_are_ignored(self) -> None:
        configure_logging(level="INFO", sinks="nowhere")
        get_logger("tessera.test").info("dropped")

    def test_configure_from_settings(self, monkeypatch, tmp_path) -> None:
        path = tmp_path / "from-settings.log"
        monkeypatch.setenv("TESSERA_LOG_SINKS", "file")
        monkeypatch.setenv("TESSERA_LOG_FILE_PATH", str(path))
        monkeypatch.setenv("TESSERA_LOG_LEVEL", "INFO")
        monkeypatch.setattr("tessera.config.settings", Settings())

        configure_from_settings()
        logger = get_logger("tessera.test")
        logger.debug("hidden")
        logger.info("shown")
        close_sinks()

        messages = [orjson.loads(line)["message"] for line in path.read_text(encoding="utf-8").splitlines()]
        assert messages == ["shown"]


class TestHostOwnsConfiguration:
    """导入与获取 logger 不修改宿主的 structlog 配置"""

    def test_get_logger_does_not_configure_structlog(self) -> None:
        structlog.reset_defaults()
        get_logger("tessera.test").info("ignored")
        assert not structlog.is_configured()

    def test_import_ignores_dotenv_logging_settings(self, tmp_path) -> None:
        log_file = tmp_path / "out" / "hijack.log"
        (tmp_path / ".env").write_text(
            f"TESSERA_LOG_SINKS=file\nTESSERA_LOG_FILE_PATH={log_file}\nTESSERA_LOG_LEVEL=DEBUG\n",
            encoding="utf-8",
        )
        src_dir = Path(tessera.__file__).resolve().parent.parent
        env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [str(src_dir), os.environ.get("PYTHONPATH")]))}
        code = (
            "import structlog, tessera\n"
            "from tessera import TokenCodec, ExpiringPayload\n"
            "TokenCodec(ExpiringPayload).create(ExpiringPayload(exp=1), 'k')\n"
            "print(structlog.is_configured())\n"
        )

        result = subprocess.run(
            [sys.executable, "-c", code], cwd=tmp_path, env=env, capture_output=True, text=True, check=True
        )

        assert result.stdout.splitlines()[-1] == "False"
        assert not log_file.exists()


class TestSinks:
    """Sink 测试"""

    def test_console_stdio_sink_has_no_color_off_tty(self) -> None:
        stream = io.StringIO()
        StdioSink(fmt="console", stream=stream).emit({"level": "info", "message": "hello", "logger": "x"})
        assert "\033[" not in stream.getvalue()
        assert stream.getvalue().rstrip().endswith("hello")

    def test_file_sink_appends_json_lines(self, tmp_path) -> None:
        path = tmp_path / "nested" / "t.log"
        sink = FileSink(path)
        sink.emit({"message": "first"})
        sink.close()
        sink = FileSink(path)
        sink.emit({"message": "second"})
        sink.close()

        messages = [orjson.loads(line)["message"] for line in path.read_text(encoding="utf-8").splitlines()]
        assert messages == ["first", "second"]


class TestConsoleFormatter:
    """ConsoleFormatter 测试"""

    def test_aligned_columns(self) -> None:
        line = ConsoleFormatter.format(
            {
                "level": "warning",
                "message": "token_rejected",
                "logger": "tessera.tokens.service",
                "timestamp": "2024-01-01T00:00:00+00:00",
                "code": "TOKEN_EXPIRED",
            },
            use_color=False,
        )
        columns = line.split(ConsoleFormatter.SEPARATOR)
        assert len(columns) == 4
        assert columns[1] == " WARNING"
        assert columns[2].strip() == "tessera.tokens.service"
        assert columns[3] == "token_rejected code=TOKEN_EXPIRED"

    def test_long_logger_names_are_truncated_from_the_left(self) -> None:
        assert ConsoleFormatter._fit_right("a" * 40 + "tail", 10) == "...aaatail"

    def test_color_on_request(self) -> None:
        line = ConsoleFormatter.format({"level": "error", "message": "boom"}, use_color=True)
        assert "\033[31m" in line
