import logging
from collections import deque
from typing import (
    Callable, Deque, Dict, Generic, Iterable, Iterator, List, NamedTuple,
    Optional, Sequence, TypeVar, cast
)

from .cursor import Cursor, Peeked
from .result import Ok
from .types import AdvanceLoc, Loc, advance_pos

logger = logging.getLogger(__name__)

T = TypeVar("T")

Join = Callable[[List[T]], Sequence[T]]


class StaleCheckpoint(RuntimeError):
    """
    Raised when a checkpoint refers to items that were already evicted.
    """


class BufferLimitExceeded(RuntimeError):
    """
    Raised when a ring would retain more items than allowed.
    """


class Mark(NamedTuple):
    index: int
    loc: Loc


class Ring(Generic[T]):
    """
    Items read from a forward-only source, retained while some reader or
    checkpoint still refers to them.

    Items are addressed by absolute indices that are never reused, so an
    index of an evicted item can always be told apart from a live one.

    :param max_retained: Maximal number of retained items
    :param join: Function that builds a range from a list of items, e.g.
        ``"".join`` for characters
    """

    def __init__(
            self, max_retained: Optional[int] = None,
            join: Optional[Join[T]] = None):
        self._items: Deque[T] = deque()
        self._offset = 0
        self._pins: Dict[int, int] = {}
        self._max_retained = max_retained
        self.join = join

    def __repr__(self) -> str:
        return "Ring(offset={!r}, head={!r}, pins={!r})".format(
            self._offset, self.head, self._pins
        )

    def __len__(self) -> int:
        return len(self._items)

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def head(self) -> int:
        return self._offset + len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index - self._offset]

    def slice(self, start: int, end: int) -> Sequence[T]:
        items = [self._items[i - self._offset] for i in range(start, end)]
        if self.join is None:
            return items
        return self.join(items)

    def append(self, item: T) -> None:
        if (
                self._max_retained is not None
                and len(self._items) >= self._max_retained):
            self._trim()
            if len(self._items) >= self._max_retained:
                raise BufferLimitExceeded(
                    "more than {} items retained".format(self._max_retained)
                )
        self._items.append(item)

    def extend(self, items: Iterable[T]) -> None:
        for item in items:
            self.append(item)

    def is_live(self, index: int) -> bool:
        return index >= self._offset

    def pin(self, index: int) -> None:
        if index < self._offset:
            raise StaleCheckpoint(
                "item {} was evicted, oldest retained item is {}".format(
                    index, self._offset
                )
            )
        self._pins[index] = self._pins.get(index, 0) + 1

    def unpin(self, index: int) -> None:
        count = self._pins[index] - 1
        if count:
            self._pins[index] = count
            return
        del self._pins[index]
        if index == self._offset:
            self._trim()

    def _trim(self) -> None:
        floor = min(self._pins) if self._pins else self.head
        if floor <= self._offset:
            return
        for _ in range(floor - self._offset):
            self._items.popleft()
        logger.debug("Evicted items %d..%d", self._offset, floor - 1)
        self._offset = floor


class RingCursor(Cursor[T]):
    """
    Cursor that reads items from a :class:`Ring`. The current position of
    every reader pins the ring, as do checkpoints until they are released.
    """

    def __init__(
            self, ring: Ring[T], index: int, loc: Loc,
            advance_loc: AdvanceLoc[T]):
        ring.pin(index)
        self._ring = ring
        self._index = index
        self._loc = loc
        self._advance_loc = advance_loc
        self._closed = False

    def __repr__(self) -> str:
        return "{}(index={!r}, loc={!r})".format(
            type(self).__name__, self._index, self._loc
        )

    @property
    def loc(self) -> Loc:
        return self._loc

    @property
    def ring(self) -> Ring[T]:
        return self._ring

    def _fill(self) -> bool:
        return False

    def _exhausted(self) -> Peeked[T]:
        return self.end_of_input()

    def peek(self) -> Peeked[T]:
        if self._index < self._ring.head or self._fill():
            return Ok(self._ring[self._index])
        return self._exhausted()

    def bump(self, item: T) -> None:
        index = self._index
        self._ring.pin(index + 1)
        self._index = index + 1
        self._loc = self._advance_loc(self._loc, item)
        self._ring.unpin(index)

    def checkpoint(self) -> Mark:
        self._ring.pin(self._index)
        return Mark(self._index, self._loc)

    def restore(self, mark: object) -> None:
        index, loc = cast(Mark, mark)
        if not self._ring.is_live(index):
            raise StaleCheckpoint(
                "checkpoint at {} is no longer retained".format(index)
            )
        if index != self._index:
            self._ring.pin(index)
            self._ring.unpin(self._index)
            self._index = index
        self._loc = loc

    def release(self, mark: object) -> None:
        self._ring.unpin(cast(Mark, mark).index)

    def range(self, mark: object) -> Sequence[T]:
        return self._ring.slice(cast(Mark, mark).index, self._index)

    def is_exhausted(self) -> bool:
        return not (self._index < self._ring.head or self._fill())

    def close(self) -> None:
        """
        Stops pinning the ring at the reader position.
        """

        if not self._closed:
            self._closed = True
            self._ring.unpin(self._index)


class BufferedCursor(RingCursor[T]):
    """
    Cursor over a single-pass iterable. Items are pulled lazily and kept only
    while the reader or a live checkpoint can still go back to them.

    >>> from incparsec.core.buffer import BufferedCursor

    >>> cursor = BufferedCursor(iter("abc"))
    >>> mark = cursor.checkpoint()
    >>> cursor.uncons().value, cursor.uncons().value
    ('a', 'b')
    >>> cursor.restore(mark)
    >>> cursor.release(mark)
    >>> cursor.uncons().value
    'a'

    :param source: Items to read
    :param max_retained: Maximal number of retained items
    :param loc: Initial location
    :param advance_loc: Function that computes a location after an item
    :param join: Function that builds a range from a list of items
    """

    def __init__(
            self, source: Iterable[T], max_retained: Optional[int] = None,
            loc: Loc = Loc(0, 0, 0),
            advance_loc: AdvanceLoc[T] = advance_pos,
            join: Optional[Join[T]] = None):
        ring: Ring[T] = Ring(max_retained, join)
        super().__init__(ring, 0, loc, advance_loc)
        self._source: Iterator[T] = iter(source)
        self._done = False

    def _fill(self) -> bool:
        if self._done:
            return False
        try:
            item = next(self._source)
        except StopIteration:
            self._done = True
            return False
        self._ring.append(item)
        return True

    def fork(self) -> "BufferedCursor[T]":
        """
        Returns another reader at the current position that shares the ring
        and the underlying source with this one.
        """

        reader = _BufferedFork(self._ring, self._index, self._loc, self)
        return reader


class _BufferedFork(BufferedCursor[T]):
    def __init__(
            self, ring: Ring[T], index: int, loc: Loc,
            parent: BufferedCursor[T]):
        RingCursor.__init__(self, ring, index, loc, parent._advance_loc)
        self._parent = parent

    def _fill(self) -> bool:
        return self._parent._fill()

    def fork(self) -> "BufferedCursor[T]":
        return _BufferedFork(self._ring, self._index, self._loc, self._parent)
