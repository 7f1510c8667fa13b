from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import pytest

from winbootstrap.logging_utils import close_logging


class FakePrompter:
    """Replays canned answers and records what was asked and shown."""

    def __init__(self, answers: Optional[List[str]] = None):
        self.answers = list(answers or [])
        self.questions: List[str] = []
        self.lines: List[str] = []

    def ask(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question}")
        return self.answers.pop(0)

    def show(self, line: str = "") -> None:
        self.lines.append(line)


@pytest.fixture
def prompter():
    def make(*answers: str) -> FakePrompter:
        return FakePrompter(list(answers))

    return make


@pytest.fixture
def write_json(tmp_path: Path):
    def write(name: str, data) -> str:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data), encoding="utf-8")
        return str(p)

    return write


@pytest.fixture(autouse=True)
def _close_transcript():
    yield
    close_logging()
