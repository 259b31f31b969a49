"""
Helpers for parsing strings character by character, with line and column
tracking.
"""

from typing import Optional, TypeVar, Union

from .core import sequence
from .core.cursor import Cursor, SequenceCursor
from .core.parser import ParseObj
from .core.types import Loc
from .output import ParseResult
from .parser import FnParser, TupleParser, run as _run
from .partial import IncrementalParser

__all__ = ("advance_loc", "fmt_loc", "string", "cursor", "run", "incremental")

A = TypeVar("A")


def advance_loc(loc: Loc, item: str) -> Loc:
    if item == "\n":
        return Loc(loc.pos + 1, loc.line + 1, 0)
    return Loc(loc.pos + 1, loc.line, loc.col + 1)


def fmt_loc(loc: Loc) -> str:
    return "{}:{}".format(loc.line + 1, loc.col + 1)


def string(s: str, label: Optional[str] = None) -> TupleParser[str, str]:
    """
    Parses the string ``s`` and returns it.

    >>> from incparsec.text import string

    >>> parser = string("ab")

    >>> parser.parse("ab").unwrap()
    'ab'
    >>> parser.parse("ac").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 0: unexpected 'ac', expected 'ab'

    :param s: String to parse
    :param label: Label to use instead of ``repr(s)``
    """

    return FnParser(sequence.tokens(s, label))


def cursor(src: str) -> SequenceCursor[str]:
    """
    Returns a cursor over ``src`` that tracks lines and columns.
    """

    return SequenceCursor(src, advance_loc=advance_loc)


def run(
        parser: ParseObj[str, A],
        stream: Union[str, Cursor[str]]) -> ParseResult[A]:
    """
    Wrapper around :func:`incparsec.parser.run` that enables line and column
    tracking.

    >>> from incparsec.text import run, string

    >>> parser = string("a\\n") + string("b") + string("c")

    >>> parser.parse("a\\nbb").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 3: unexpected 'b', expected 'c'
    >>> run(parser, "a\\nbb").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 2:2: unexpected 'b', expected 'c'

    :param parser: Parser to run
    :param stream: String or cursor to parse
    """

    return _run(parser, stream, advance_loc=advance_loc, fmt_loc=fmt_loc)


def incremental(
        parser: ParseObj[str, A],
        max_retained: Optional[int] = None) -> IncrementalParser[str, A]:
    """
    Returns an :class:`~incparsec.partial.IncrementalParser` for text that
    arrives in chunks.

    :param parser: Parser to run
    :param max_retained: Maximal number of retained characters
    """

    return IncrementalParser(parser, max_retained, advance_loc, "".join)
