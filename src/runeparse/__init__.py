"""
Parser combinators for Unicode text.

A parser is a function that takes the input text and returns `(token, remainder, failure)`.

See the objects for more explanations.

See the `runeparse.general` module for general purpose parsers you can use as examples.

Defining parsers:
```
key = repeat1(LETTER)
value = until(NEWLINE)
entry = seq(key, drop(BLANK), drop("="), drop(BLANK), value)
```

Using parsers:
```
token, rest, failure = entry("name = value\\n")
if failure is None:
    ... # matched `token`, `rest` is what's left
else:
    ... # `failure` is a `ParseFailure` object

token, rest = parse(entry, "name = value\\n")   # raises a `ParseError` instead
```
"""

import runeparse.const as const
import runeparse.main
from runeparse.main import (
    ParseFailure,
    Exhausted,
    Mismatch,
    NoMatch,
    UnexpectedInput,
    ParseError,
    ParseOutput,
    Parser,
    check_input_size,
    byte,
    rune,
    literal,
    anycase,
    rune_from,
    any_rune,
    eoi,
    seq,
    oneof,
    optional,
    repeat0,
    repeat1,
    drop,
    until,
    through,
    decode,
    parse,
)
import runeparse.general as general
from runeparse.general import (
    DIGIT,
    HEX_DIGIT,
    LETTER,
    WHITESPACE,
    UNIX_NEWLINE,
    WINDOWS_NEWLINE,
    NEWLINE,
    BLANK,
    INTEGER,
    IDENTIFIER,
    LINE,
)
