"""Tests for the pre-defined parsers in runeparse.general."""

from __future__ import annotations

from runeparse import (
    BLANK,
    DIGIT,
    HEX_DIGIT,
    IDENTIFIER,
    INTEGER,
    LETTER,
    LINE,
    NEWLINE,
    WHITESPACE,
    WINDOWS_NEWLINE,
    UNIX_NEWLINE,
    Exhausted,
    NoMatch,
)


def test_digit() -> None:
    for i in range(128):
        c = chr(i)
        token, rest, failure = DIGIT(c)
        if c in "0123456789":
            assert (token, rest, failure) == (c, "", None)
        else:
            assert (token, rest) == ("", c)
            assert failure is not None


def test_letter() -> None:
    assert LETTER("Zed") == ("Z", "ed", None)
    assert LETTER("1")[2] is not None
    assert LETTER("é")[2] is not None


def test_hex_digit() -> None:
    assert HEX_DIGIT("fF") == ("f", "F", None)
    assert HEX_DIGIT("g")[2] is not None


def test_whitespace() -> None:
    for c in " \t\r\n":
        assert WHITESPACE(c + "x") == (c, "x", None)
    assert WHITESPACE("\f")[2] is not None


def test_newlines() -> None:
    assert UNIX_NEWLINE("\nx") == ("\n", "x", None)
    assert WINDOWS_NEWLINE("\r\nx") == ("\r\n", "x", None)
    assert NEWLINE("\nx") == ("\n", "x", None)
    assert NEWLINE("\r\nx") == ("\r\n", "x", None)
    token, rest, failure = NEWLINE("\rx")
    assert (token, rest) == ("", "\rx")
    assert isinstance(failure, NoMatch)


def test_blank() -> None:
    assert BLANK(" \t\nx") == ("", "x", None)
    assert BLANK("x") == ("", "x", None)
    assert BLANK("") == ("", "", None)


def test_integer() -> None:
    assert INTEGER("-42;") == ("-42", ";", None)
    assert INTEGER("7") == ("7", "", None)
    token, rest, failure = INTEGER("-x")
    assert (token, rest) == ("", "-x")
    assert failure is not None


def test_identifier() -> None:
    assert IDENTIFIER("_foo1 bar") == ("_foo1", " bar", None)
    assert IDENTIFIER("x") == ("x", "", None)
    assert isinstance(IDENTIFIER("1abc")[2], NoMatch)


def test_line() -> None:
    assert LINE("one\r\ntwo") == ("one\r\n", "two", None)
    assert LINE("one\ntwo\n") == ("one\n", "two\n", None)
    token, rest, failure = LINE("last")
    assert (token, rest) == ("", "last")
    assert isinstance(failure, Exhausted)
