from __future__ import annotations

import logging
from typing import Callable, Collection, Optional, Protocol, TypeVar

from rich.console import Console
from rich.text import Text

from ..errors import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Prompter(Protocol):
    """Line-oriented console I/O used by every interactive step."""

    def ask(self, question: str) -> str:
        ...

    def show(self, line: str = "") -> None:
        ...


class ConsolePrompter:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def ask(self, question: str) -> str:
        # Blocks until the user answers (no timeout).
        return self.console.input(Text(question + " "))

    def show(self, line: str = "") -> None:
        self.console.print(Text(line))


def prompt_until(
    prompter: Prompter,
    question: str,
    parse: Callable[[str], T],
    *,
    max_attempts: Optional[int] = None,
) -> T:
    """Ask until ``parse`` accepts the (stripped) answer.

    ``parse`` signals rejection by raising ValidationError; the message is
    logged as a warning and the question is asked again. With
    ``max_attempts`` the last ValidationError propagates once exhausted.
    """

    attempts = 0
    while True:
        attempts += 1
        answer = prompter.ask(question).strip()
        try:
            return parse(answer)
        except ValidationError as e:
            logger.warning("%s", e)
            if max_attempts is not None and attempts >= max_attempts:
                raise


def prompt_validated(
    prompter: Prompter,
    question: str,
    validator: Callable[[str], bool],
    *,
    allow_skip: bool = False,
    default: Optional[str] = None,
    invalid_message: str = "Invalid value: {value!r}",
    required_message: str = "A value is required",
    max_attempts: Optional[int] = None,
    clear_words: Collection[str] = (),
) -> Optional[str]:
    """Reprompt-until-valid for a single text value.

    Empty input yields ``default`` when one is given, ``None`` when
    ``allow_skip``, otherwise a warning and another prompt. Any of
    ``clear_words`` (case-insensitive) yields ``None`` even over a default.
    """

    clear = {w.lower() for w in clear_words}

    def parse(answer: str) -> Optional[str]:
        if answer.lower() in clear:
            return None
        if not answer:
            if default is not None:
                return default
            if allow_skip:
                return None
            raise ValidationError(required_message)
        if not validator(answer):
            raise ValidationError(invalid_message.format(value=answer))
        return answer

    return prompt_until(prompter, question, parse, max_attempts=max_attempts)


_YES = {"y", "yes"}
_NO = {"n", "no"}


def confirm(prompter: Prompter, question: str, *, default: bool = True) -> bool:
    suffix = "[Y/n]" if default else "[y/N]"

    def parse(answer: str) -> bool:
        a = answer.lower()
        if not a:
            return default
        if a in _YES:
            return True
        if a in _NO:
            return False
        raise ValidationError(f"Please answer 'y' or 'n' (got {answer!r})")

    return prompt_until(prompter, f"{question} {suffix}", parse)
