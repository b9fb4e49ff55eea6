"""
The implementations of the failure types, the matchers and the combinators.
"""

from __future__ import annotations
from typing import Self, Final, Protocol, TypeAlias
from collections.abc import Iterable

from functools import wraps
import logging

import runeparse.const as const


log = logging.getLogger("runeparse")


def preview(text: str) -> str:
    """Shortens `text` for failure messages and logs."""
    if len(text) <= const.PREVIEW_LENGTH:
        return text
    return text[:const.PREVIEW_LENGTH] + "..."



class ParseFailure:
    """
    When returned as the outcome of a parser, indicates that it has failed. Can be converted into a `ParseError`.

    ```
    token, rest, failure = parser(text)
    if failure is None:
        ... # matched `token`
    else:
        ... # `failure` is a `ParseFailure` object
    ```
    """

    def __init__(self, at: str, msg: str | None = None) -> None:
        """
        `at`: The input the failing matcher was looking at. Always a suffix of the text being parsed.
        `msg`: The reason for the failure.
        """
        self.at: Final[str] = at
        self.msg: Final[str | None] = msg

    def position(self, src: str) -> int:
        """The position of the failure within `src`, the text that was being parsed."""
        return len(src) - len(self.at)

    def error(self, src: str) -> ParseError:
        """Converts this to a ParseError."""
        return ParseError(src, self.position(src), self.msg)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.msg!r}>"

class Exhausted(ParseFailure):
    """The input ran out while a matcher needed at least one more rune."""

    def __init__(self, at: str, expected: str | None = None) -> None:
        super().__init__(at, "Ran out of input" if expected is None else f"Expected {expected}, ran out of input")
        self.expected: Final[str | None] = expected

class Mismatch(ParseFailure):
    """
    The input was present but didn't match.

    `expected` and `actual` are display strings, not the raw values.
    """

    def __init__(self, at: str, expected: str, actual: str) -> None:
        super().__init__(at, f"Expected {expected}, got {actual}")
        self.expected: Final[str] = expected
        self.actual: Final[str] = actual

class NoMatch(ParseFailure):
    """
    None of the alternatives of `oneof()` matched.

    The message is always "No match". The individual failures are kept in `failures`, in the order of the alternatives.
    """

    def __init__(self, at: str, failures: tuple[ParseFailure, ...] = ()) -> None:
        super().__init__(at, "No match")
        self.failures: Final[tuple[ParseFailure, ...]] = failures

class UnexpectedInput(ParseFailure):
    """Expected the end of the input, but there was more."""

    def __init__(self, at: str) -> None:
        super().__init__(at, "Expected the end of input")

class ParseError(Exception):
    """
    The exception that's raised when a failure reaches the caller of `parse()`.

    Carries a note pointing at the line and column of the failure.
    """

    def __init__(self, src: str, pos: int, msg: str | None = None) -> None:
        """
        `src`: The string that was being parsed.
        `pos`: The position of the error.
        `msg`: The reason for the error.
        """
        if msg is None:
            super().__init__()
        else:
            super().__init__(msg)
        self.src: str = src
        self.pos: int = pos
        self.append_pos_note(pos)

    def append_pos_note(self, pos: int, msg: str | None = None) -> Self:
        note: list[str] = [] if msg is None else [msg]

        pos = min(pos, len(self.src))
        # should still work with CRLF
        line = self.src.count("\n", 0, pos) + 1
        column = pos - self.src.rfind("\n", 0, pos) # magically works even when it returns -1
        note.append(f"At position {pos} (line {line}, column {column})")

        lines = self.src.splitlines()
        if len(lines) > line-1:
            line_str = lines[line-1]
            if len(line_str) >= column:
                if column <= 20:
                    note.append(f"{line_str[:40]}\n{' '*(column-1)}^")
                else:
                    note.append(f"{line_str[(column-20):(column+20)]}\n{' '*20}^")
        self.add_note("\n".join(note))
        return self



ParseOutput: TypeAlias = tuple[str, str, ParseFailure | None]
"""`(token, remainder, failure)`. The failure is `None` on success."""

class Parser(Protocol):
    """
    A protocol for parsers.

    Takes the input text, returns the consumed token, the remaining text and the failure (`None` if it matched).

    On failure, the token is empty and the remaining text is the untouched input.
    """
    def __call__(self, text: str) -> ParseOutput: ...

FactoryParameter = Parser | str

def convert_factory_parameter(parser: FactoryParameter) -> Parser:
    if isinstance(parser, str):
        return literal(parser)
    else:
        assert callable(parser)
        return parser

def convert_factory_parameters(parsers: tuple[FactoryParameter, ...]) -> tuple[Parser, ...]:
    return tuple(convert_factory_parameter(parser) for parser in parsers)


def check_input_size(parser: Parser) -> Parser:
    """
    Fails with `Exhausted` on empty input without calling `parser`. Otherwise calls it unchanged.

    Wraps every matcher that looks at the next rune:
    ```
    @check_input_size
    def parser(text: str) -> ParseOutput:
        ... # `text[0]` is safe here
    ```
    """
    @wraps(parser)
    def inner(text: str) -> ParseOutput:
        if not text:
            return "", text, Exhausted(text)
        return parser(text)
    return inner



def byte(value: int | str) -> Parser:
    """
    Parser factory. Matches a single byte.

    `value` is an ASCII code (0-127) or a single ASCII character. Only ASCII is allowed, since any other byte would split a rune.
    """
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("Expected a single character.")
        value = ord(value)
    if not 0 <= value <= const.MAX_BYTE:
        raise ValueError(f"Only ASCII bytes can be matched, got {value}.")
    char = chr(value)
    expected = repr(bytes([value]))

    @check_input_size
    def parser(text: str) -> ParseOutput:
        if text[0] != char:
            actual = repr(text[0].encode("utf-8", "surrogatepass")[:1])
            return "", text, Mismatch(text, expected, actual)
        return text[:1], text[1:], None
    return parser

def rune(value: str) -> Parser:
    """Parser factory. Matches a single rune (Unicode scalar)."""
    if len(value) != 1:
        raise ValueError("Expected a single rune.")

    @check_input_size
    def parser(text: str) -> ParseOutput:
        if text[0] != value:
            return "", text, Mismatch(text, repr(value), repr(text[0]))
        return text[:1], text[1:], None
    return parser

def literal(value: str) -> Parser:
    """
    Parser factory. Matches the given string. Case sensitive.

    Fails with `Exhausted` if the input is shorter than the string.
    """
    if len(value) <= 0:
        raise ValueError("At least one character required.")
    size = len(value)

    @check_input_size
    def parser(text: str) -> ParseOutput:
        if len(text) < size:
            return "", text, Exhausted(text, repr(value))
        if text[:size] != value:
            return "", text, Mismatch(text, repr(value), repr(text[:size]))
        return text[:size], text[size:], None
    return parser

def anycase(value: str) -> Parser:
    """
    Parser factory. Matches the given string. Non case sensitive.

    The token keeps the casing found in the input.
    """
    if len(value) <= 0:
        raise ValueError("At least one character required.")
    size = len(value)
    folded = value.casefold()

    @check_input_size
    def parser(text: str) -> ParseOutput:
        if len(text) < size:
            return "", text, Exhausted(text, repr(value))
        if text[:size].casefold() != folded:
            return "", text, Mismatch(text, repr(value), repr(text[:size]))
        return text[:size], text[size:], None
    return parser

def rune_from(chars: Iterable[str]) -> Parser:
    """
    Parser factory. Matches any single rune in `chars`.

    `chars` is usually a string or a set of single-rune strings.
    """
    runes = frozenset(chars)
    if len(runes) <= 0:
        raise ValueError("At least one rune required.")
    if any(len(r) != 1 for r in runes):
        raise ValueError("Every member must be a single rune.")
    expected = "a rune from " + repr(chars if isinstance(chars, str) else "".join(sorted(runes)))

    @check_input_size
    def parser(text: str) -> ParseOutput:
        if text[0] not in runes:
            return "", text, Mismatch(text, expected, repr(text[0]))
        return text[:1], text[1:], None
    return parser

@check_input_size
def any_rune(text: str) -> ParseOutput:
    """A pre-defined parser (not a factory). Consumes exactly one rune, whatever it is."""
    return text[:1], text[1:], None

def eoi(text: str) -> ParseOutput:
    """A pre-defined parser (not a factory). Matches only the empty input, consuming nothing."""
    if text:
        return "", text, UnexpectedInput(text)
    return "", "", None



def seq(*parsers: FactoryParameter) -> Parser:
    """
    A Parser factory.

    All the given parsers must match in sequence for the parser to succeed. The token is the concatenation of their tokens.

    If any of them fails, returns its failure along with the untouched input.
    """
    if len(parsers) <= 0:
        raise ValueError("At least one parser required.")
    new_parsers = convert_factory_parameters(parsers)
    if len(new_parsers) == 1:
        return new_parsers[0]

    def inner(text: str) -> ParseOutput:
        tokens: list[str] = []
        rest = text
        for parser in new_parsers:
            token, rest, failure = parser(rest)
            if failure is not None:
                return "", text, failure
            tokens.append(token)
        return "".join(tokens), rest, None
    return inner

def oneof(*parsers: FactoryParameter) -> Parser:
    """
    A Parser factory.

    Attempts to match any of the parsers against the same input, in order, until one matches. The first match is returned as-is.

    If none match, fails with `NoMatch`.
    """
    if len(parsers) <= 0:
        raise ValueError("At least one parser required.")
    new_parsers = convert_factory_parameters(parsers)

    def inner(text: str) -> ParseOutput:
        failures: list[ParseFailure] = []
        for parser in new_parsers:
            token, rest, failure = parser(text)
            if failure is None:
                return token, rest, None
            failures.append(failure)
        if log.isEnabledFor(logging.DEBUG):
            log.debug("none of %d alternatives matched at %r", len(failures), preview(text))
        return "", text, NoMatch(text, tuple(failures))
    return inner

def optional(*parsers: FactoryParameter) -> Parser:
    """
    A Parser factory.

    Returns a parser that succeeds no matter what the given parser returns. On failure, nothing is consumed.

    If multiple parsers are supplied, matches them in sequence.
    """
    parser = seq(*parsers)

    def inner(text: str) -> ParseOutput:
        token, rest, _ = parser(text)
        return token, rest, None
    return inner

def _repeat(parser: Parser, tokens: list[str], rest: str) -> ParseOutput:
    # stops at the first failure, or at a match that didn't consume anything
    while True:
        token, next_rest, failure = parser(rest)
        if failure is not None or len(next_rest) >= len(rest):
            return "".join(tokens), rest, None
        tokens.append(token)
        rest = next_rest

def repeat0(*parsers: FactoryParameter) -> Parser:
    """
    A Parser factory.

    Repeatedly matches the given parser until it fails. Never fails.

    If multiple parsers are supplied, matches them in sequence. (All parsers must match for an iteration to be considered successful)
    """
    parser = seq(*parsers)
    return lambda text: _repeat(parser, [], text)

def repeat1(*parsers: FactoryParameter) -> Parser:
    """
    A Parser factory.

    Repeatedly matches the given parser until it fails. Succeeds if at least one iteration matches, otherwise returns the failure of the first iteration.

    If multiple parsers are supplied, matches them in sequence. (All parsers must match for an iteration to be considered successful)
    """
    parser = seq(*parsers)

    def inner(text: str) -> ParseOutput:
        token, rest, failure = parser(text)
        if failure is not None:
            return "", text, failure
        return _repeat(parser, [token], rest)
    return inner

def drop(*parsers: FactoryParameter) -> Parser:
    """
    A Parser factory.

    Consumes the same as the given parser, but the token is always empty. The failure is passed through.

    Useful for skipping whitespace inside `seq()`.
    """
    parser = seq(*parsers)

    def inner(text: str) -> ParseOutput:
        _, rest, failure = parser(text)
        return "", rest, failure
    return inner



def _scan(parser: Parser, text: str, *, inclusive: bool) -> ParseOutput:
    tokens: list[str] = []
    rest = text
    while True:
        token, after, failure = parser(rest)
        if failure is None:
            if inclusive:
                tokens.append(token)
                return "".join(tokens), after, None
            return "".join(tokens), rest, None
        # forced advance, so that the parser can be tried at the next rune
        token, rest, failure = any_rune(rest)
        if failure is not None:
            if log.isEnabledFor(logging.DEBUG):
                log.debug("ran out of input while scanning %r", preview(text))
            return "", text, failure
        tokens.append(token)

def until(parser: FactoryParameter) -> Parser:
    """
    A Parser factory.

    Consumes runes until the given parser matches. The token is everything up to, but not including, the match. The match is not consumed.

    Fails with `Exhausted` if the input runs out first.
    """
    new_parser = convert_factory_parameter(parser)
    return lambda text: _scan(new_parser, text, inclusive=False)

def through(parser: FactoryParameter) -> Parser:
    """
    A Parser factory.

    Consumes runes until the given parser matches, then consumes the match too. The token includes the match.

    Fails with `Exhausted` if the input runs out first.
    """
    new_parser = convert_factory_parameter(parser)
    return lambda text: _scan(new_parser, text, inclusive=True)



def decode(src: bytes) -> str:
    """Decodes UTF-8 input. Raises a `ParseError` pointing at the first invalid byte."""
    try:
        return src.decode("utf-8")
    except UnicodeDecodeError as e:
        text = src.decode("utf-8", errors="replace")
        pos = len(src[:e.start].decode("utf-8"))
        raise ParseError(text, pos, f"Invalid UTF-8: {e.reason}") from e

def parse(parser: FactoryParameter, text: str | bytes, *, complete: bool = False) -> tuple[str, str]:
    """
    Runs the parser and returns `(token, remainder)`.

    `bytes` are decoded as UTF-8 first.

    `complete`: If true, leftover input is an error too.

    Raises a `ParseError` on failure.
    """
    if isinstance(text, bytes):
        text = decode(text)
    new_parser = convert_factory_parameter(parser)
    log.debug("parsing %r", preview(text))
    token, rest, failure = new_parser(text)
    if failure is None and complete and rest:
        failure = UnexpectedInput(rest)
    if failure is not None:
        log.debug("failed at position %d: %s", failure.position(text), failure.msg)
        raise failure.error(text)
    log.debug("consumed %d of %d characters", len(text) - len(rest), len(text))
    return token, rest
