import io
import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console

from winbootstrap.logging_utils import close_logging, configure_logging, log_success, transcript_name


def test_transcript_name():
    assert transcript_name(datetime(2024, 3, 5, 7, 8, 9)) == "bootstrap-20240305-070809.log"


def test_tagged_console_and_transcript(tmp_path):
    buf = io.StringIO()
    console = Console(file=buf, force_terminal=False, width=200)

    path = configure_logging(log_dir=str(tmp_path / "logs"), console=console)
    log = logging.getLogger("winbootstrap.test")
    log.info("hello")
    log_success(log, "done %s", "ok")
    log.warning("careful")
    log.error("bad")
    log.debug("only in transcript")
    close_logging()

    out = buf.getvalue().splitlines()
    assert "[INFO] hello" in out
    assert "[SUCCESS] done ok" in out
    assert "[WARNING] careful" in out
    assert "[ERROR] bad" in out
    assert not any("only in transcript" in line for line in out)

    assert Path(path).parent == tmp_path / "logs"
    text = Path(path).read_text(encoding="utf-8")
    assert "only in transcript" in text
    assert "SUCCESS" in text


def test_configure_is_idempotent_and_close_detaches(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)

    first = configure_logging(log_dir=str(tmp_path), also_console=False)
    second = configure_logging(log_dir=str(tmp_path / "other"), also_console=False)

    assert first == second
    assert len(root.handlers) == len(before) + 1

    close_logging()
    close_logging()
    assert root.handlers == before
