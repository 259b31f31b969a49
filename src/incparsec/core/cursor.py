from abc import abstractmethod
from typing import Generic, Sequence, TypeVar, Union, cast

from .errors import END_OF_INPUT, Errors, Unexpected
from .result import Error, Incomplete, Ok
from .types import AdvanceLoc, Loc, advance_pos

T = TypeVar("T")

Peeked = Union[Ok[T], Error, Incomplete]


class Cursor(Generic[T]):
    """
    Position-tracking view over an input.

    A cursor moves in place; checkpoints are immutable values that can be
    restored any number of times.
    """

    @property
    @abstractmethod
    def loc(self) -> Loc:
        ...

    @abstractmethod
    def peek(self) -> Peeked[T]:
        """
        Returns the next item without advancing, an end of input error, or
        :class:`Incomplete` if a partial cursor has no data yet.
        """

    @abstractmethod
    def bump(self, item: T) -> None:
        """
        Advances past ``item``, which must be the result of :meth:`peek`.
        """

    @abstractmethod
    def checkpoint(self) -> object:
        ...

    @abstractmethod
    def restore(self, mark: object) -> None:
        ...

    def release(self, mark: object) -> None:
        pass

    @abstractmethod
    def range(self, mark: object) -> Sequence[T]:
        """
        Returns items consumed since ``mark``.
        """

    def uncons(self) -> Peeked[T]:
        r = self.peek()
        if type(r) is Ok:
            self.bump(r.value)
            return Ok(r.value, True)
        return r

    def is_exhausted(self) -> bool:
        return type(self.peek()) is not Ok

    def is_partial(self) -> bool:
        return False

    def end_of_input(self) -> Error:
        return Error(Errors(self.loc, [Unexpected(END_OF_INPUT)]))


class SequenceCursor(Cursor[T]):
    """
    Cursor over an in-memory sequence. Checkpoints are plain
    :class:`~incparsec.core.types.Loc` values.

    :param stream: Input sequence
    :param loc: Initial location
    :param advance_loc: Function that computes a location after an item
    """

    __slots__ = "_stream", "_loc", "_advance_loc", "_view"

    def __init__(
            self, stream: Sequence[T], loc: Loc = Loc(0, 0, 0),
            advance_loc: AdvanceLoc[T] = advance_pos):
        self._stream = stream
        self._loc = loc
        self._advance_loc = advance_loc
        if isinstance(stream, (bytes, bytearray, memoryview)):
            self._view: Sequence[T] = memoryview(stream)
        else:
            self._view = stream

    def __repr__(self) -> str:
        return "SequenceCursor(loc={!r})".format(self._loc)

    @property
    def loc(self) -> Loc:
        return self._loc

    @property
    def stream(self) -> Sequence[T]:
        return self._stream

    def peek(self) -> Peeked[T]:
        pos = self._loc.pos
        if pos < len(self._stream):
            return Ok(self._stream[pos])
        return self.end_of_input()

    def bump(self, item: T) -> None:
        self._loc = self._advance_loc(self._loc, item)

    def checkpoint(self) -> Loc:
        return self._loc

    def restore(self, mark: object) -> None:
        self._loc = cast(Loc, mark)

    def range(self, mark: object) -> Sequence[T]:
        return self._view[cast(Loc, mark).pos:self._loc.pos]

    def is_exhausted(self) -> bool:
        return self._loc.pos >= len(self._stream)
