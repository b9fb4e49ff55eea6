"""
General purpose parsers, built only out of the matchers and combinators.

All of them are constants and can be shared freely.
"""

from __future__ import annotations
from typing import Final

import runeparse.const as const
from runeparse.main import (
    Parser,
    rune,
    literal,
    rune_from,
    seq,
    oneof,
    optional,
    repeat0,
    repeat1,
    drop,
    through,
)

DIGIT: Final[Parser] = rune_from(const.DECIMAL)
"""0-9"""
HEX_DIGIT: Final[Parser] = rune_from(const.HEXADECIMAL)
LETTER: Final[Parser] = rune_from(const.ALPHABETIC)
"""a-z, A-Z"""
WHITESPACE: Final[Parser] = rune_from(const.WHITESPACES)
"""Space, tab, carriage return or line feed."""

UNIX_NEWLINE: Final[Parser] = rune(const.UNIX_NEWLINE)
WINDOWS_NEWLINE: Final[Parser] = literal(const.WINDOWS_NEWLINE)
NEWLINE: Final[Parser] = oneof(UNIX_NEWLINE, WINDOWS_NEWLINE)
"""Unix newline first, then Windows."""

BLANK: Final[Parser] = drop(repeat0(WHITESPACE))
"""Skips zero or more whitespaces. The token is always empty."""

INTEGER: Final[Parser] = seq(optional("-"), repeat1(DIGIT))
"""
An optional minus sign followed by decimal digits.

The token is the number as written, so `int(token)` works on it.
"""

IDENTIFIER: Final[Parser] = seq(
    oneof(LETTER, "_"),
    repeat0(oneof(LETTER, DIGIT, "_")),
)

LINE: Final[Parser] = through(NEWLINE)
"""Everything up to and including the next newline. Fails on the last line if it has no newline."""
