from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from typing_extensions import final

from .types import Loc


@final
@dataclass(frozen=True)
class Label:
    text: str

    def __str__(self) -> str:
        return self.text


@final
@dataclass(frozen=True)
class Item:
    value: object

    def __str__(self) -> str:
        return repr(self.value)


Info = Union[Label, Item]

END_OF_INPUT = Label("end of input")


@final
@dataclass(frozen=True)
class Unexpected:
    info: Info


@final
@dataclass(frozen=True)
class Expected:
    info: Info


@final
@dataclass(frozen=True)
class Message:
    info: Info


@final
@dataclass(frozen=True)
class Opaque:
    cause: object


ErrorItem = Union[Unexpected, Expected, Message, Opaque]


def _union(
        fst: Tuple[ErrorItem, ...],
        snd: Iterable[ErrorItem]) -> Tuple[ErrorItem, ...]:
    items: List[ErrorItem] = list(fst)
    for item in snd:
        if item not in items:
            items.append(item)
    return tuple(items)


@final
class Errors:
    """
    Errors collected at a single input location.

    :param loc: Location of the errors
    :param items: Error items, duplicates are dropped
    """

    __slots__ = "loc", "items"

    def __init__(self, loc: Loc, items: Iterable[ErrorItem] = ()):
        self.loc = loc
        self.items = _union((), items)

    def __repr__(self) -> str:
        return "Errors(loc={!r}, items={!r})".format(self.loc, self.items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Errors):
            return NotImplemented
        return self.loc == other.loc and self.items == other.items

    @property
    def expected(self) -> List[str]:
        return [str(i.info) for i in self.items if type(i) is Expected]

    @property
    def unexpected(self) -> List[str]:
        return [str(i.info) for i in self.items if type(i) is Unexpected]

    @property
    def messages(self) -> List[str]:
        return [str(i.info) for i in self.items if type(i) is Message]

    @property
    def causes(self) -> List[object]:
        return [i.cause for i in self.items if type(i) is Opaque]

    def add(self, *items: ErrorItem) -> "Errors":
        return Errors(self.loc, _union(self.items, items))


def merge(fst: Errors, snd: Errors) -> Errors:
    """
    Merges two errors. The error at the further location wins; errors at the
    same location are combined, items of ``fst`` first.
    """

    if fst.loc.pos != snd.loc.pos:
        return fst if fst.loc.pos > snd.loc.pos else snd
    if not snd.items:
        return fst
    return Errors(fst.loc, _union(fst.items, snd.items))


def expect(errors: Errors, label: str) -> Errors:
    """
    Replaces expected items of ``errors`` with a single ``label``.
    """

    return Errors(
        errors.loc,
        [i for i in errors.items if type(i) is not Expected] +
        [Expected(Label(label))]
    )
