from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text

DEFAULT_LOG_DIR = "logs"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_TAG_STYLES = {
    "DEBUG": "dim",
    "INFO": "cyan",
    "SUCCESS": "bold green",
    "WARNING": "yellow",
    "ERROR": "bold red",
    "CRITICAL": "bold white on red",
}


def log_success(logger: logging.Logger, msg: str, *args) -> None:
    logger.log(SUCCESS, msg, *args)


class TaggedConsoleHandler(logging.Handler):
    """Render records as colored ``[LEVEL] message`` lines."""

    def __init__(self, console: Optional[Console] = None, level: int = logging.INFO):
        super().__init__(level=level)
        self.console = console or Console(highlight=False)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tag = record.levelname
            line = Text.assemble((f"[{tag}]", _TAG_STYLES.get(tag, "")), " ", record.getMessage())
            self.console.print(line)
        except Exception:
            self.handleError(record)


def transcript_name(now: Optional[datetime] = None) -> str:
    return f"bootstrap-{(now or datetime.now()).strftime('%Y%m%d-%H%M%S')}.log"


def configure_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    level: int = logging.INFO,
    also_console: bool = True,
    console: Optional[Console] = None,
) -> str:
    """Configure logging for one run.

    Every record goes to an append-only transcript named after the run start
    time. If ``log_dir`` is not writable the transcript is created in the
    working directory instead.

    Returns the actual transcript path.
    """

    logger = logging.getLogger()
    logger.setLevel(min(level, logging.DEBUG))

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_winbootstrap_configured", False):
        return getattr(logger, "_winbootstrap_log_path")

    name = transcript_name()
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        chosen_path = str(Path(log_dir) / name)
        file_handler = logging.FileHandler(chosen_path, mode="a", encoding="utf-8")
    except OSError:
        # Fall back to a writable location.
        chosen_path = str(Path.cwd() / name)
        file_handler = logging.FileHandler(chosen_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        handlers.append(TaggedConsoleHandler(console=console, level=level))

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_winbootstrap_configured", True)
    setattr(logger, "_winbootstrap_log_path", chosen_path)
    setattr(logger, "_winbootstrap_handlers", handlers)

    logging.getLogger(__name__).info("Transcript started: %s", chosen_path)
    return chosen_path


def close_logging() -> None:
    """Flush and close the transcript; safe to call more than once."""

    logger = logging.getLogger()
    if not getattr(logger, "_winbootstrap_configured", False):
        return

    logging.getLogger(__name__).debug("Transcript closed")
    for h in getattr(logger, "_winbootstrap_handlers", []):
        logger.removeHandler(h)
        h.close()

    setattr(logger, "_winbootstrap_configured", False)
    setattr(logger, "_winbootstrap_handlers", [])
