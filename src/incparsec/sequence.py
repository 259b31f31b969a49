"""
Parsers for arbitrary sequences.
"""

from typing import Any, Callable, Optional, Sequence, TypeVar

from .core import sequence
from .parser import FnParser, TupleParser

__all__ = (
    "eof", "satisfy", "sym", "any_item", "tokens", "letter", "digit",
    "space", "spaces"
)

A = TypeVar("A")
S = TypeVar("S", bound=Sequence[Any])


def eof() -> TupleParser[object, None]:
    """
    Succeeds at the end of the input.

    >>> from incparsec.sequence import eof

    >>> eof().parse("").unwrap()
    >>> eof().parse("a").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 0: unexpected 'a', expected end of input
    """

    return FnParser(sequence.eof())


def satisfy(test: Callable[[A], bool]) -> TupleParser[A, A]:
    """
    Succeeds for sequence element for which ``test`` returns ``True`` and
    returns that element.

    >>> from incparsec.sequence import satisfy

    >>> parser = satisfy(lambda c: c.isalpha())

    >>> parser.parse("a").unwrap()
    'a'
    >>> parser.parse("0").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 0: unexpected '0'

    :param test: Predicate for sequence elements
    """

    return FnParser(sequence.satisfy(test))


def sym(s: A, label: Optional[str] = None) -> TupleParser[A, A]:
    """
    Parses ``s`` and returns the parsed element.

    >>> from incparsec.sequence import sym

    >>> sym("a").parse("a").unwrap()
    'a'
    >>> sym("a").parse("0").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 0: unexpected '0', expected 'a'

    :param s: Value to parse
    :param label: Label to use instead of ``repr(s)``
    """

    return FnParser(sequence.sym(s, label))


def any_item() -> TupleParser[A, A]:
    """
    Parses any element.
    """

    return satisfy(lambda _: True)


def tokens(s: S, label: Optional[str] = None) -> TupleParser[Any, S]:
    """
    Parses the elements of ``s`` one by one and returns ``s``. Consumes input
    as soon as the first element matches. The error is reported at the start
    of ``s`` and names the items found there, up to the first mismatch.

    >>> from incparsec.sequence import tokens

    >>> tokens(["a", "b"]).parse(["a", "b"]).unwrap()
    ['a', 'b']
    >>> tokens(b"ab").parse(b"ac").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 0: unexpected b'ac', expected b'ab'

    :param s: Elements to parse
    :param label: Label to use instead of ``repr(s)``
    """

    return FnParser(sequence.tokens(s, label))


letter: TupleParser[str, str] = satisfy(str.isalpha).label("letter")
digit: TupleParser[str, str] = satisfy(str.isdigit).label("digit")
space: TupleParser[str, str] = satisfy(str.isspace).label("whitespace")
spaces: TupleParser[str, str] = space.many().fmap("".join)
