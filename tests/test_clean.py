import pytest

from prompt_chunker.ingest.clean import normalize_newlines, optimize_input


def test_adds_please_and_period():
    assert optimize_input("Refactor this function") == "Please refactor this function."


def test_collapses_whitespace():
    assert optimize_input("  fix \n\n the\tbug  ") == "Please fix the bug."


@pytest.mark.parametrize(
    "text",
    [
        "please explain closures",
        "Could you explain closures?",
        "Explain closures, PLEASE!",
    ],
)
def test_polite_text_keeps_its_opening(text):
    out = optimize_input(text)
    assert out.lower().count("please") == text.lower().count("please")
    assert out[0] == text[0]


def test_existing_terminal_punctuation_is_kept():
    assert optimize_input("Please, why?") == "Please, why?"


@pytest.mark.parametrize(
    "text",
    ["hello world", "  a   b  ", "Could you do it", "Why is it slow?", "x"],
)
def test_idempotent(text):
    once = optimize_input(text)
    assert optimize_input(once) == once


def test_without_politeness():
    assert optimize_input("do it", polite=False) == "do it."


def test_empty_and_blank_input():
    assert optimize_input("") == ""
    assert optimize_input("   \n ") == ""


def test_normalize_newlines():
    assert normalize_newlines("a\r\nb\rc") == "a\nb\nc"
