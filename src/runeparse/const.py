"""
General use constants.
"""

from __future__ import annotations
from typing import Final

WHITESPACES: Final[frozenset[str]] = frozenset({" ", "\t", "\r", "\n"})
DECIMAL: Final[frozenset[str]] = frozenset({"0", "1", "2", "3", "4", "5", "6", "7", "8", "9"})
HEXADECIMAL: Final[frozenset[str]] = DECIMAL | {"a", "b", "c", "d", "e", "f", "A", "B", "C", "D", "E", "F"}
ALPHABETIC: Final[frozenset[str]] = frozenset({"a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n", "o", "p", "q", "r", "s", "t", "u", "v", "w", "x", "y", "z", "A", "B", "C", "D", "E", "F", "G", "H", "I", "J", "K", "L", "M", "N", "O", "P", "Q", "R", "S", "T", "U", "V", "W", "X", "Y", "Z"})

UNIX_NEWLINE: Final[str] = "\n"
WINDOWS_NEWLINE: Final[str] = "\r\n"

MAX_BYTE: Final[int] = 0x7F
"""`byte()` only accepts ASCII, where one UTF-8 byte is exactly one rune."""

PREVIEW_LENGTH: Final[int] = 20
"""How many characters of the input are shown in failure messages and logs."""
