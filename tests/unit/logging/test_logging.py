"""Tests for scan context, JSON formatting and logging setup."""

import json
import logging

import pytest

from lanplay.config.models import LoggingConfig
from lanplay.logging import (
    JSONFormatter,
    ScanContextFilter,
    configure_logging,
    get_scan_context,
    scan_context,
)


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("lanplay.test", logging.INFO, __file__, 1, msg, (), None)


@pytest.fixture
def isolated_root_logger(monkeypatch: pytest.MonkeyPatch):
    """Give configure_logging a private handler list on the root logger."""
    root = logging.getLogger()
    access = logging.getLogger("aiohttp.access")
    levels = root.level, access.level
    monkeypatch.setattr(root, "handlers", [])
    yield root
    for handler in root.handlers:
        handler.close()
    root.setLevel(levels[0])
    access.setLevel(levels[1])


class TestScanContext:
    def test_default_is_empty(self):
        assert get_scan_context() == (None, None)

    def test_sets_and_resets(self):
        with scan_context("S0001", "auto"):
            assert get_scan_context() == ("S0001", "auto")
        assert get_scan_context() == (None, None)

    def test_resets_after_exception(self):
        with pytest.raises(RuntimeError):
            with scan_context("S0002"):
                raise RuntimeError
        assert get_scan_context() == (None, None)


class TestScanContextFilter:
    def test_adds_tag_inside_scan(self):
        record = _record()
        with scan_context("S0004", "cli"):
            ScanContextFilter().filter(record)
        assert record.scan_id == "S0004"
        assert record.scan_trigger == "cli"
        assert record.scan_tag == "[S0004] "

    def test_empty_tag_outside_scan(self):
        record = _record()
        ScanContextFilter().filter(record)
        assert record.scan_tag == ""


class TestJSONFormatter:
    def test_formats_message_and_scan_context(self):
        record = _record("scanned")
        with scan_context("S0005", "auto"):
            ScanContextFilter().filter(record)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "scanned"
        assert data["level"] == "INFO"
        assert data["context"]["scan_id"] == "S0005"

    def test_includes_extra_fields(self):
        record = _record()
        record.returncode = 1

        data = json.loads(JSONFormatter().format(record))

        assert data["context"]["returncode"] == 1


@pytest.mark.usefixtures("isolated_root_logger")
class TestConfigureLogging:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "lanplay.log"

        configure_logging(LoggingConfig(level="debug", file=log_file))
        logging.getLogger("lanplay.test").info("written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "written" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger().level == logging.DEBUG

    def test_stderr_when_no_file(self):
        configure_logging(LoggingConfig())

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_quiets_access_log(self):
        configure_logging(LoggingConfig(level="info"))
        assert logging.getLogger("aiohttp.access").level == logging.WARNING
