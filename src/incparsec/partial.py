"""
Incremental parsing of input that arrives in chunks.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar, Union

from .core.buffer import Join
from .core.cursor import Cursor
from .core.errors import END_OF_INPUT, Errors, Unexpected
from .core.parser import ParseObj
from .core.result import Error, Ok
from .core.source import PartialCursor, PartialSource
from .core.types import AdvanceLoc, Loc, advance_pos, fmt_pos
from .output import ParseError

__all__ = (
    "PartialSource", "PartialCursor", "ResumeToken", "Done",
    "NeedsMoreInput", "Failed", "PartialResult", "run_partial", "resume",
    "IncrementalParser"
)

logger = logging.getLogger(__name__)

S = TypeVar("S")
A = TypeVar("A")
V_co = TypeVar("V_co", covariant=True)


@dataclass(frozen=True)
class ResumeToken(Generic[S, A]):
    """
    Suspended parse.

    :param parser: Top-level parser of the suspended call
    :param state: State of the suspended combinators
    :param mark: Cursor checkpoint at the suspension point
    :param loc: Location where more input is needed
    :param needed: Minimal number of additional items, if known
    """

    parser: ParseObj[S, A]
    state: Any
    mark: object
    loc: Loc
    needed: Optional[int]


@dataclass(frozen=True)
class Done(Generic[V_co]):
    """
    Parsing succeeded.

    :param value: Parsed value
    :param loc: Location of the remaining input
    """

    value: V_co
    loc: Loc

    def unwrap(self) -> V_co:
        return self.value


@dataclass(frozen=True)
class NeedsMoreInput(Generic[S, A]):
    """
    Parsing is suspended until more input is available.
    """

    token: ResumeToken[S, A]

    @property
    def needed(self) -> Optional[int]:
        return self.token.needed

    def unwrap(self) -> A:
        raise ParseError(
            Errors(self.token.loc, [Unexpected(END_OF_INPUT)]),
            fmt_pos(self.token.loc)
        )


@dataclass(frozen=True)
class Failed:
    """
    Parsing failed.

    :param errors: Merged errors at the furthest location
    """

    errors: Errors

    def unwrap(self, fmt_loc: Callable[[Loc], str] = fmt_pos) -> Any:
        raise ParseError(self.errors, fmt_loc(self.errors.loc))


PartialResult = Union[Done[A], NeedsMoreInput[S, A], Failed]


def _drive(
        parser: ParseObj[S, A], cursor: Cursor[S],
        state: Any) -> PartialResult[S, A]:
    r = parser.parse_fn(cursor, state)
    if type(r) is Ok:
        return Done(r.value, cursor.loc)
    if type(r) is Error:
        return Failed(r.errors)
    if not cursor.is_partial():
        logger.warning(
            "Incomplete result at %s for a finished source", r.loc
        )
        return Failed(Errors(r.loc, [Unexpected(END_OF_INPUT)]))
    mark = cursor.checkpoint()
    logger.debug("Suspended at %s, needed %s", r.loc, r.needed)
    return NeedsMoreInput(
        ResumeToken(parser, r.state, mark, r.loc, r.needed)
    )


def run_partial(
        parser: ParseObj[S, A], cursor: Cursor[S]) -> PartialResult[S, A]:
    """
    Runs ``parser`` on a cursor whose input may be incomplete.

    Returns :class:`Done` or :class:`Failed` when the result is definite, and
    :class:`NeedsMoreInput` when the cursor ran out of available input. Feed
    more input to the source and call :func:`resume` with the token to
    continue.

    >>> from incparsec.partial import PartialSource, resume, run_partial
    >>> from incparsec.sequence import digit

    >>> source = PartialSource()
    >>> cursor = source.cursor()
    >>> parser = digit.many()

    >>> source.feed("12")
    >>> r = run_partial(parser, cursor)
    >>> r.needed
    1
    >>> source.feed("3")
    >>> source.finish()
    >>> resume(r.token, cursor)
    Done(value=['1', '2', '3'], loc=Loc(pos=3, line=0, col=0))

    :param parser: Parser to run
    :param cursor: Cursor to read from
    """

    return _drive(parser, cursor, None)


def resume(
        token: ResumeToken[S, A], cursor: Cursor[S]) -> PartialResult[S, A]:
    """
    Continues a suspended parse. The cursor must be the one the token was
    produced from. A token can be resumed only once.

    :param token: Token from :class:`NeedsMoreInput`
    :param cursor: Cursor of the suspended parse
    """

    cursor.restore(token.mark)
    cursor.release(token.mark)
    logger.debug("Resuming at %s", token.loc)
    return _drive(token.parser, cursor, token.state)


class IncrementalParser(Generic[S, A]):
    """
    Drives a parser over chunks of input.

    >>> from incparsec.partial import IncrementalParser
    >>> from incparsec.sequence import digit, eof

    >>> parser = IncrementalParser(digit.many() << eof())
    >>> parser.feed("1")  # doctest: +ELLIPSIS
    NeedsMoreInput(...)
    >>> parser.feed("2")  # doctest: +ELLIPSIS
    NeedsMoreInput(...)
    >>> parser.finish().unwrap()
    ['1', '2']

    :param parser: Parser to run
    :param max_retained: Maximal number of retained items
    :param advance_loc: Function that computes a location after an item
    :param join: Function that builds a range from a list of items, picked
        from the first chunk if not given
    """

    def __init__(
            self, parser: ParseObj[S, A], max_retained: Optional[int] = None,
            advance_loc: AdvanceLoc[S] = advance_pos,
            join: Optional[Join[S]] = None):
        self.source: PartialSource[S] = PartialSource(max_retained, join)
        self.cursor = self.source.cursor(advance_loc=advance_loc)
        self._result: PartialResult[S, A] = run_partial(parser, self.cursor)

    @property
    def result(self) -> PartialResult[S, A]:
        return self._result

    def _continue(self) -> PartialResult[S, A]:
        if type(self._result) is NeedsMoreInput:
            self._result = resume(self._result.token, self.cursor)
        return self._result

    def feed(self, chunk: Iterable[S]) -> PartialResult[S, A]:
        """
        Appends ``chunk`` to the input and continues parsing.

        :param chunk: Next part of the input
        """

        self.source.feed(chunk)
        return self._continue()

    def finish(self) -> PartialResult[S, A]:
        """
        Marks the input as complete and returns the definite result.
        """

        self.source.finish()
        return self._continue()
