"""Tests for the date-stamped log file handler."""

from __future__ import annotations

import logging
import re
import time

import pytest

from grok_search.logfile import DailyFileHandler, configure_logging


@pytest.fixture
def logger():
    log = logging.getLogger("grok_search.tests.logfile")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    yield log
    for handler in list(log.handlers):
        log.removeHandler(handler)


class TestDailyFileHandler:
    def test_writes_formatted_line(self, tmp_path, logger):
        handler = DailyFileHandler(tmp_path / "logs")
        logger.addHandler(handler)

        logger.info("Begin Search: %s", "mcp")

        files = list((tmp_path / "logs").iterdir())
        assert len(files) == 1
        assert re.fullmatch(r"grok_search_\d{8}\.log", files[0].name)
        line = files[0].read_text(encoding="utf-8")
        assert re.fullmatch(
            r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] \[INFO\] Begin Search: mcp\n", line,
        )

    def test_appends(self, tmp_path, logger):
        logger.addHandler(DailyFileHandler(tmp_path))
        logger.info("one")
        logger.error("two")
        lines = next(tmp_path.glob("grok_search_*.log")).read_text().splitlines()
        assert lines[0].endswith("[INFO] one")
        assert lines[1].endswith("[ERROR] two")

    def test_file_named_after_record_day(self, tmp_path):
        handler = DailyFileHandler(tmp_path)
        created = time.mktime((2025, 3, 9, 23, 59, 0, 0, 0, -1))
        assert handler.path_for(created).name == "grok_search_20250309.log"

    def test_level_filtering(self, tmp_path, logger):
        logger.addHandler(DailyFileHandler(tmp_path, level=logging.INFO))
        logger.debug("hidden")
        logger.info("shown")
        text = next(tmp_path.glob("grok_search_*.log")).read_text()
        assert "hidden" not in text
        assert "shown" in text

    def test_write_failure_is_swallowed(self, tmp_path, logger):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        logger.addHandler(DailyFileHandler(blocker / "logs"))
        logger.error("goes nowhere")  # must not raise


class TestConfigureLogging:
    def test_attaches_handlers(self, tmp_path):
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            configure_logging(tmp_path, debug=True, level="WARNING")
            added = [h for h in root.handlers if h not in before]
            file_handlers = [h for h in added if isinstance(h, DailyFileHandler)]
            assert len(file_handlers) == 1
            assert file_handlers[0].level == logging.DEBUG
            console = [h for h in added if not isinstance(h, DailyFileHandler)]
            assert console[0].level == logging.WARNING
        finally:
            for h in list(root.handlers):
                if h not in before:
                    root.removeHandler(h)

    def test_bad_level_falls_back_to_info(self, tmp_path):
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            configure_logging(tmp_path, level="chatty")
            added = [h for h in root.handlers if h not in before]
            console = [h for h in added if not isinstance(h, DailyFileHandler)]
            assert console[0].level == logging.INFO
        finally:
            for h in list(root.handlers):
                if h not in before:
                    root.removeHandler(h)
