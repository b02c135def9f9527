"""Date-stamped log files and logging setup.

One append-only file per calendar day, ``grok_search_YYYYMMDD.log``, with
lines of the form ``[2025-01-31 12:00:00] [INFO] message``.  Nothing is ever
written to stdout: it carries the MCP stream.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FILE_PREFIX = "grok_search_"
_LINE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class DailyFileHandler(logging.Handler):
    """Append each record to the file for the day it was created.

    The file is opened per record, so the handler rolls over at midnight
    without a background timer.  Failures to write are dropped.
    """

    def __init__(self, log_dir: str | Path, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.log_dir = Path(log_dir)
        self.setFormatter(logging.Formatter(_LINE_FORMAT, datefmt=_DATE_FORMAT))

    def path_for(self, created: float) -> Path:
        day = time.strftime("%Y%m%d", time.localtime(created))
        return self.log_dir / f"{LOG_FILE_PREFIX}{day}.log"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with open(self.path_for(record.created), "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        # Logging must never fail a tool call.
        pass


def configure_logging(
    log_dir: str | Path,
    debug: bool = False,
    level: str = "INFO",
    verbose: bool = False,
) -> None:
    """Attach the daily file handler and a stderr console handler.

    The file receives DEBUG records when *debug* is on, INFO otherwise.  The
    console uses *level* (``GROK_LOG_LEVEL``), or DEBUG with *verbose*.
    """
    console_level = getattr(logging, level.upper(), logging.INFO)
    if verbose or not isinstance(console_level, int):
        console_level = logging.DEBUG if verbose else logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = DailyFileHandler(
        log_dir, level=logging.DEBUG if debug else logging.INFO,
    )
    console_handler = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_path=False,
    )
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
