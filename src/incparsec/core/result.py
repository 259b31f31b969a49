from enum import Enum
from typing import Callable, Generic, Optional, TypeVar, Union

from typing_extensions import final

from .errors import Errors, expect, merge
from .types import Loc

A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)
B = TypeVar("B")


class Outcome(Enum):
    EMPTY_OK = "empty ok"
    CONSUMED_OK = "consumed ok"
    EMPTY_ERR = "empty error"
    CONSUMED_ERR = "consumed error"


def _join(
        fst: Optional[Errors], snd: Optional[Errors]) -> Optional[Errors]:
    if fst is None:
        return snd
    if snd is None:
        return fst
    return merge(fst, snd)


@final
class Ok(Generic[A_co]):
    __slots__ = "value", "consumed", "errors"

    def __init__(
            self, value: A_co, consumed: bool = False,
            errors: Optional[Errors] = None):
        self.value = value
        self.consumed = consumed
        self.errors = errors

    def __repr__(self) -> str:
        return "Ok(value={!r}, consumed={!r}, errors={!r})".format(
            self.value, self.consumed, self.errors
        )

    @property
    def kind(self) -> Outcome:
        return Outcome.CONSUMED_OK if self.consumed else Outcome.EMPTY_OK

    def fmap(self, fn: Callable[[A_co], B]) -> "Ok[B]":
        return Ok(fn(self.value), self.consumed, self.errors)

    def set_label(self, label: str) -> "Ok[A_co]":
        if not self.consumed and self.errors is not None:
            self.errors = expect(self.errors, label)
        return self

    def prepend(
            self, errors: Optional[Errors], consumed: bool) -> "Ok[A_co]":
        if not self.consumed:
            self.errors = _join(errors, self.errors)
            self.consumed = consumed
        return self

    def merge(self, errors: Optional[Errors]) -> "Ok[A_co]":
        self.errors = _join(errors, self.errors)
        return self


@final
class Error:
    __slots__ = "errors", "consumed"

    def __init__(self, errors: Errors, consumed: bool = False):
        self.errors = errors
        self.consumed = consumed

    def __repr__(self) -> str:
        return "Error(errors={!r}, consumed={!r})".format(
            self.errors, self.consumed
        )

    @property
    def kind(self) -> Outcome:
        return Outcome.CONSUMED_ERR if self.consumed else Outcome.EMPTY_ERR

    @property
    def loc(self) -> Loc:
        return self.errors.loc

    def fmap(self, fn: object) -> "Error":
        return self

    def set_label(self, label: str) -> "Error":
        if not self.consumed:
            self.errors = expect(self.errors, label)
        return self

    def prepend(self, errors: Optional[Errors], consumed: bool) -> "Error":
        if not self.consumed:
            if errors is not None:
                self.errors = merge(errors, self.errors)
            self.consumed = consumed
        return self

    def merge(self, errors: Optional[Errors]) -> "Error":
        if errors is not None:
            self.errors = merge(errors, self.errors)
        return self


@final
class Incomplete:
    """
    The cursor ran out of available input. ``state`` holds what is needed to
    continue the suspended call once more input arrives.
    """

    __slots__ = "state", "loc", "needed", "consumed"

    def __init__(
            self, state: object, loc: Loc, needed: Optional[int] = None,
            consumed: bool = False):
        self.state = state
        self.loc = loc
        self.needed = needed
        self.consumed = consumed

    def __repr__(self) -> str:
        return (
            "Incomplete(state={!r}, loc={!r}, needed={!r}, consumed={!r})"
        ).format(self.state, self.loc, self.needed, self.consumed)

    def fmap(self, fn: object) -> "Incomplete":
        return self

    def set_label(self, label: str) -> "Incomplete":
        return self

    def prepend(self, errors: object, consumed: bool) -> "Incomplete":
        self.consumed |= consumed
        return self

    def merge(self, errors: object) -> "Incomplete":
        return self

    def suspend(
            self, state: object,
            consumed: Optional[bool] = None) -> "Incomplete":
        return Incomplete(
            state, self.loc, self.needed,
            self.consumed if consumed is None else consumed
        )


SimpleResult = Union[Ok[A], Error]
Result = Union[Ok[A], Error, Incomplete]
