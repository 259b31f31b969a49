from typing import Any, Callable, Optional, Sequence, TypeVar

from .cursor import Cursor
from .errors import END_OF_INPUT, Errors, Expected, Item, Label, Unexpected
from .parser import ParseFn
from .result import Error, Incomplete, Ok, Result

T = TypeVar("T")
S = TypeVar("S", bound=Sequence[Any])


def eof() -> ParseFn[object, None]:
    expected = Expected(END_OF_INPUT)

    def eof(cursor: Cursor[object], state: Any) -> Result[None]:
        r = cursor.peek()
        if type(r) is Ok:
            return Error(
                Errors(cursor.loc, [Unexpected(Item(r.value)), expected])
            )
        if type(r) is Error:
            return Ok(None)
        return r

    return eof


def satisfy(test: Callable[[T], bool]) -> ParseFn[T, T]:
    def satisfy(cursor: Cursor[T], state: Any) -> Result[T]:
        r = cursor.peek()
        if type(r) is Ok:
            t = r.value
            if test(t):
                cursor.bump(t)
                return Ok(t, True)
            return Error(Errors(cursor.loc, [Unexpected(Item(t))]))
        return r

    return satisfy


def sym(s: T, label: Optional[str]) -> ParseFn[T, T]:
    expected = Expected(Item(s) if label is None else Label(label))

    def sym(cursor: Cursor[T], state: Any) -> Result[T]:
        r = cursor.peek()
        if type(r) is Ok:
            t = r.value
            if t == s:
                cursor.bump(t)
                return Ok(t, True)
            return Error(
                Errors(cursor.loc, [Unexpected(Item(t)), expected])
            )
        if type(r) is Error:
            return r.merge(Errors(cursor.loc, [expected]))
        return r

    return sym


def _found(s: S, i: int, item: Any) -> Any:
    head = s[:i]
    if isinstance(s, str):
        return head + item
    if isinstance(s, (bytes, bytearray)):
        return head + bytes([item])
    return list(head) + [item]


def tokens(s: S, label: Optional[str]) -> ParseFn[Any, S]:
    if not s:
        raise ValueError("Empty sequence of tokens")
    ls = len(s)
    expected = Expected(Item(s) if label is None else Label(label))

    def tokens(cursor: Cursor[Any], state: Any) -> Result[S]:
        start = cursor.loc
        mark = cursor.checkpoint()
        try:
            for i, x in enumerate(s):
                r = cursor.peek()
                if type(r) is Ok and r.value == x:
                    cursor.bump(r.value)
                    continue
                if type(r) is Incomplete:
                    cursor.restore(mark)
                    return Incomplete(None, start, ls - i)
                # positioned at the start of the run
                if type(r) is Ok:
                    found = Item(_found(s, i, r.value))
                elif i:
                    found = Item(s[:i])
                else:
                    found = END_OF_INPUT
                return Error(
                    Errors(start, [Unexpected(found), expected]), i > 0
                )
            return Ok(s, True)
        finally:
            cursor.release(mark)

    return tokens
