from typing import Generic, Iterable, Optional, TypeVar

from .buffer import Join, Ring, RingCursor
from .cursor import Peeked
from .result import Incomplete
from .types import AdvanceLoc, Loc, advance_pos

T = TypeVar("T")


class PartialSource(Generic[T]):
    """
    Input that arrives in chunks. Until :meth:`finish` is called, running out
    of items means that more items may still come.

    Ranges of consumed items are built with ``join``. If it is not given,
    it is picked from the first chunk: ``"".join`` for strings, ``bytes``
    for bytes-like chunks, lists otherwise.

    :param max_retained: Maximal number of retained items
    :param join: Function that builds a range from a list of items
    """

    def __init__(
            self, max_retained: Optional[int] = None,
            join: Optional[Join[T]] = None):
        self.ring: Ring[T] = Ring(max_retained, join)
        self.final = False

    def __repr__(self) -> str:
        return "PartialSource(ring={!r}, final={!r})".format(
            self.ring, self.final
        )

    def feed(self, chunk: Iterable[T]) -> None:
        if self.final:
            raise ValueError("source is already finished")
        if self.ring.join is None:
            if isinstance(chunk, str):
                self.ring.join = "".join
            elif isinstance(chunk, (bytes, bytearray, memoryview)):
                self.ring.join = bytes
            else:
                self.ring.join = list
        self.ring.extend(chunk)

    def finish(self) -> None:
        self.final = True

    def cursor(
            self, loc: Loc = Loc(0, 0, 0),
            advance_loc: AdvanceLoc[T] = advance_pos) -> "PartialCursor[T]":
        return PartialCursor(self, loc, advance_loc)


class PartialCursor(RingCursor[T]):
    """
    Cursor over a :class:`PartialSource`. Reports
    :class:`~incparsec.core.result.Incomplete` instead of end of input while
    the source is not finished.
    """

    def __init__(
            self, source: PartialSource[T], loc: Loc = Loc(0, 0, 0),
            advance_loc: AdvanceLoc[T] = advance_pos):
        super().__init__(source.ring, source.ring.offset, loc, advance_loc)
        self._source = source

    @property
    def source(self) -> PartialSource[T]:
        return self._source

    def _exhausted(self) -> Peeked[T]:
        if self._source.final:
            return self.end_of_input()
        return Incomplete(None, self._loc, 1)

    def is_partial(self) -> bool:
        return not self._source.final
