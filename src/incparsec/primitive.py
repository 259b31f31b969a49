"""
Primitive input-agnostic parsers.
"""

from typing import TypeVar

from .core import primitive
from .parser import FnParser, TupleParser

__all__ = ("Pure", "PureFn", "pure", "fail", "unexpected")

S_contra = TypeVar("S_contra", contravariant=True)
A_co = TypeVar("A_co", covariant=True)


class Pure(primitive.Pure[S_contra, A_co], TupleParser[S_contra, A_co]):
    """
    Parser that always succeeds, consumes no input, and returns constant value.

    >>> from incparsec.primitive import Pure

    >>> Pure(0).parse("").unwrap()
    0

    :param x: Value to return
    """


class PureFn(primitive.PureFn[S_contra, A_co], TupleParser[S_contra, A_co]):
    """
    Parser that always succeeds, consumes no input, and returns the result of
    function.

    >>> from incparsec.primitive import PureFn

    >>> PureFn(lambda: list()).parse("").unwrap()
    []

    :param fn: Function that produces a value to return
    """


def pure(x: A_co) -> TupleParser[object, A_co]:
    """
    Same as :class:`Pure`.

    :param x: Value to return
    """

    return Pure(x)


def fail(message: str) -> TupleParser[object, None]:
    """
    Parser that always fails with ``message`` and consumes no input.

    >>> from incparsec.primitive import fail

    >>> fail("not implemented").parse("").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 0: not implemented

    :param message: Error message
    """

    return FnParser(primitive.fail(message))


def unexpected(label: str) -> TupleParser[object, None]:
    """
    Parser that always fails and consumes no input.

    >>> from incparsec.primitive import unexpected

    >>> unexpected("keyword").parse("").unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 0: unexpected keyword

    :param label: Description of the unexpected input
    """

    return FnParser(primitive.unexpected(label))
