import logging

import pytest

from winbootstrap.errors import ValidationError
from winbootstrap.lib.prompt import confirm, prompt_validated
from winbootstrap.lib.validators import is_valid_ipv4


def test_reprompts_until_valid(prompter, caplog):
    p = prompter("nope", "300.1.1.1", " 10.0.0.1 ")

    assert prompt_validated(p, "IP:", is_valid_ipv4) == "10.0.0.1"
    assert len(p.questions) == 3
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2


def test_empty_answer_skip_default_and_required(prompter):
    assert prompt_validated(prompter(""), "IP:", is_valid_ipv4, allow_skip=True) is None
    assert prompt_validated(prompter(""), "IP:", is_valid_ipv4, default="1.1.1.1") == "1.1.1.1"

    p = prompter("", "", "8.8.8.8")
    assert prompt_validated(p, "IP:", is_valid_ipv4) == "8.8.8.8"
    assert len(p.questions) == 3


def test_max_attempts_raises(prompter):
    p = prompter("x", "y")
    with pytest.raises(ValidationError):
        prompt_validated(p, "IP:", is_valid_ipv4, max_attempts=2)


@pytest.mark.parametrize(
    "answers, default, expected",
    [
        ([""], True, True),
        ([""], False, False),
        (["y"], False, True),
        (["YES"], False, True),
        (["n"], True, False),
        (["maybe", "no"], True, False),
    ],
)
def test_confirm(prompter, answers, default, expected):
    p = prompter(*answers)

    assert confirm(p, "Continue?", default=default) is expected
    assert p.questions[0].endswith("[Y/n]" if default else "[y/N]")


def test_clear_words_override_default(prompter):
    p = prompter("DHCP")

    assert prompt_validated(p, "IP:", lambda v: True, default="10.0.0.5", clear_words=("dhcp",)) is None
