from typing import Any, Callable, TypeVar

from .cursor import Cursor
from .errors import Errors, Label, Message, Unexpected
from .parser import ParseFn, ParseObj
from .result import Error, Ok, Result

S_contra = TypeVar("S_contra", contravariant=True)
A_co = TypeVar("A_co", covariant=True)


class Pure(ParseObj[S_contra, A_co]):
    def __init__(self, x: A_co):
        self._x = x

    def parse_fn(
            self, cursor: Cursor[S_contra], state: Any) -> Result[A_co]:
        return Ok(self._x)


class PureFn(ParseObj[S_contra, A_co]):
    def __init__(self, fn: Callable[[], A_co]):
        self._fn = fn

    def parse_fn(
            self, cursor: Cursor[S_contra], state: Any) -> Result[A_co]:
        return Ok(self._fn())


def fail(message: str) -> ParseFn[object, None]:
    items = [Message(Label(message))]

    def fail(cursor: Cursor[object], state: Any) -> Result[None]:
        return Error(Errors(cursor.loc, items))

    return fail


def unexpected(label: str) -> ParseFn[object, None]:
    items = [Unexpected(Label(label))]

    def unexpected(cursor: Cursor[object], state: Any) -> Result[None]:
        return Error(Errors(cursor.loc, items))

    return unexpected
