from typing import (
    Any, Callable, List, NamedTuple, Optional, Sequence, Tuple, Type, TypeVar,
    Union
)

from .cursor import Cursor
from .errors import Errors, Opaque
from .parser import ParseFn, ParseObj
from .result import Error, Incomplete, Ok, Result

S = TypeVar("S")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")

MergeFn = Callable[[A, B], C]


class _First(NamedTuple):
    inner: object


class _Second(NamedTuple):
    inner: object
    value: object
    consumed: bool
    errors: Optional[Errors]


class _Repeat(NamedTuple):
    inner: object
    values: Tuple[object, ...]
    consumed: bool


class _Marked(NamedTuple):
    inner: object
    mark: object


def fmap(parse_fn: ParseFn[S, A], fn: Callable[[A], B]) -> ParseFn[S, B]:
    def fmap(cursor: Cursor[S], state: Any) -> Result[B]:
        return parse_fn(cursor, state).fmap(fn)

    return fmap


def try_fmap(
        parse_fn: ParseFn[S, A], fn: Callable[[A], B],
        exceptions: Tuple[Type[Exception], ...]) -> ParseFn[S, B]:
    def try_fmap(cursor: Cursor[S], state: Any) -> Result[B]:
        if type(state) is _Marked:
            start, inner = state.mark, state.inner
        else:
            start, inner = cursor.loc, None
        r = parse_fn(cursor, inner)
        if type(r) is Incomplete:
            return r.suspend(_Marked(r.state, start))
        if type(r) is Error:
            return r
        try:
            value = fn(r.value)
        except exceptions as e:
            return Error(Errors(start, [Opaque(e)]), r.consumed)
        return Ok(value, r.consumed, r.errors)

    return try_fmap


def alt(
        parse_fn: ParseFn[S, A],
        second_fn: ParseFn[S, B]) -> ParseFn[S, Union[A, B]]:
    def second(
            rb: Result[B], errors: Optional[Errors]) -> Result[Union[A, B]]:
        if type(rb) is Incomplete:
            return rb.suspend(_Second(rb.state, None, False, errors))
        if rb.consumed:
            return rb
        return rb.merge(errors)

    def alt(cursor: Cursor[S], state: Any) -> Result[Union[A, B]]:
        if type(state) is _Second:
            return second(second_fn(cursor, state.inner), state.errors)
        ra = parse_fn(cursor, None if state is None else state.inner)
        if type(ra) is Incomplete:
            return ra.suspend(_First(ra.state))
        if type(ra) is Ok or ra.consumed:
            return ra
        return second(second_fn(cursor, None), ra.errors)

    return alt


def bind(
        parse_fn: ParseFn[S, A],
        fn: Callable[[A], ParseObj[S, B]]) -> ParseFn[S, B]:
    def second(
            next_fn: ParseFn[S, B], rb: Result[B], consumed: bool,
            errors: Optional[Errors]) -> Result[B]:
        if type(rb) is Incomplete:
            return rb.suspend(
                _Second(rb.state, next_fn, consumed, errors),
                rb.consumed or consumed
            )
        return rb.prepend(errors, consumed)

    def bind(cursor: Cursor[S], state: Any) -> Result[B]:
        if type(state) is _Second:
            return second(
                state.value, state.value(cursor, state.inner),
                state.consumed, state.errors
            )
        ra = parse_fn(cursor, None if state is None else state.inner)
        if type(ra) is Incomplete:
            return ra.suspend(_First(ra.state))
        if type(ra) is Error:
            return ra
        next_fn = fn(ra.value).to_fn()
        return second(
            next_fn, next_fn(cursor, None), ra.consumed, ra.errors
        )

    return bind


def _seq(
        parse_fn: ParseFn[S, A], second_fn: ParseFn[S, B],
        merge: MergeFn[A, B, C]) -> ParseFn[S, C]:
    def second(
            va: Any, rb: Result[B], consumed: bool,
            errors: Optional[Errors]) -> Result[C]:
        if type(rb) is Incomplete:
            return rb.suspend(
                _Second(rb.state, va, consumed, errors),
                rb.consumed or consumed
            )
        return rb.fmap(lambda vb: merge(va, vb)).prepend(errors, consumed)

    def seq(cursor: Cursor[S], state: Any) -> Result[C]:
        if type(state) is _Second:
            return second(
                state.value, second_fn(cursor, state.inner), state.consumed,
                state.errors
            )
        ra = parse_fn(cursor, None if state is None else state.inner)
        if type(ra) is Incomplete:
            return ra.suspend(_First(ra.state))
        if type(ra) is Error:
            return ra
        return second(
            ra.value, second_fn(cursor, None), ra.consumed, ra.errors
        )

    return seq


def seql(parse_fn: ParseFn[S, A], second_fn: ParseFn[S, B]) -> ParseFn[S, A]:
    return _seq(parse_fn, second_fn, lambda l, _: l)


def seqr(parse_fn: ParseFn[S, A], second_fn: ParseFn[S, B]) -> ParseFn[S, B]:
    return _seq(parse_fn, second_fn, lambda _, r: r)


def seq(
        parse_fn: ParseFn[S, A],
        second_fn: ParseFn[S, B]) -> ParseFn[S, Tuple[A, B]]:
    return _seq(parse_fn, second_fn, lambda l, r: (l, r))


A0 = TypeVar("A0")
A1 = TypeVar("A1")
A2 = TypeVar("A2")
A3 = TypeVar("A3")


def tuple3(
        parse_fn: ParseFn[S, Tuple[A0, A1]],
        second_fn: ParseFn[S, A2]) -> ParseFn[S, Tuple[A0, A1, A2]]:
    def merge(a: Tuple[A0, A1], b: A2) -> Tuple[A0, A1, A2]:
        return (*a, b)
    return _seq(parse_fn, second_fn, merge)


def tuple4(
        parse_fn: ParseFn[S, Tuple[A0, A1, A2]],
        second_fn: ParseFn[S, A3]) -> ParseFn[S, Tuple[A0, A1, A2, A3]]:
    def merge(a: Tuple[A0, A1, A2], b: A3) -> Tuple[A0, A1, A2, A3]:
        return (*a, b)
    return _seq(parse_fn, second_fn, merge)


def maybe(parse_fn: ParseFn[S, A]) -> ParseFn[S, Optional[A]]:
    def maybe(cursor: Cursor[S], state: Any) -> Result[Optional[A]]:
        r = parse_fn(cursor, state)
        if type(r) is Incomplete or type(r) is Ok or r.consumed:
            return r
        return Ok(None, False, r.errors)

    return maybe


def _many(parse_fn: ParseFn[S, A], at_least: int) -> ParseFn[S, List[A]]:
    def many(cursor: Cursor[S], state: Any) -> Result[List[A]]:
        if type(state) is _Repeat:
            value: List[Any] = list(state.values)
            consumed = state.consumed
            r = parse_fn(cursor, state.inner)
        else:
            value = []
            consumed = False
            r = parse_fn(cursor, None)
        while type(r) is Ok:
            if not r.consumed:
                raise RuntimeError("parser shouldn't accept empty input")
            consumed = True
            value.append(r.value)
            r = parse_fn(cursor, None)
        if type(r) is Incomplete:
            return r.suspend(
                _Repeat(r.state, tuple(value), consumed),
                r.consumed or consumed
            )
        if r.consumed or len(value) < at_least:
            return r
        return Ok(value, consumed, r.errors)

    return many


def many(parse_fn: ParseFn[S, A]) -> ParseFn[S, List[A]]:
    return _many(parse_fn, 0)


def many1(parse_fn: ParseFn[S, A]) -> ParseFn[S, List[A]]:
    return _many(parse_fn, 1)


def _run_marked(
        parse_fn: ParseFn[S, A], cursor: Cursor[S], state: Any,
        mark: object) -> Result[A]:
    try:
        return parse_fn(cursor, state)
    except BaseException:
        cursor.release(mark)
        raise


def attempt(parse_fn: ParseFn[S, A]) -> ParseFn[S, A]:
    def attempt(cursor: Cursor[S], state: Any) -> Result[A]:
        if type(state) is _Marked:
            mark, inner = state.mark, state.inner
        else:
            mark, inner = cursor.checkpoint(), None
        r = _run_marked(parse_fn, cursor, inner, mark)
        if type(r) is Incomplete:
            return r.suspend(_Marked(r.state, mark))
        if type(r) is Error:
            cursor.restore(mark)
            cursor.release(mark)
            return Error(r.errors)
        cursor.release(mark)
        return r

    return attempt


def lookahead(parse_fn: ParseFn[S, A]) -> ParseFn[S, A]:
    def lookahead(cursor: Cursor[S], state: Any) -> Result[A]:
        if type(state) is _Marked:
            mark, inner = state.mark, state.inner
        else:
            mark, inner = cursor.checkpoint(), None
        r = _run_marked(parse_fn, cursor, inner, mark)
        if type(r) is Incomplete:
            return r.suspend(_Marked(r.state, mark), False)
        cursor.restore(mark)
        cursor.release(mark)
        if type(r) is Ok:
            return Ok(r.value)
        return Error(r.errors)

    return lookahead


def recognize(parse_fn: ParseFn[S, Any]) -> ParseFn[S, Sequence[S]]:
    def recognize(cursor: Cursor[S], state: Any) -> Result[Sequence[S]]:
        if type(state) is _Marked:
            mark, inner = state.mark, state.inner
        else:
            mark, inner = cursor.checkpoint(), None
        r = _run_marked(parse_fn, cursor, inner, mark)
        if type(r) is Incomplete:
            return r.suspend(_Marked(r.state, mark))
        if type(r) is Error:
            cursor.release(mark)
            return r
        value = cursor.range(mark)
        cursor.release(mark)
        return Ok(value, r.consumed, r.errors)

    return recognize


def label(parse_fn: ParseFn[S, A], x: str) -> ParseFn[S, A]:
    def label(cursor: Cursor[S], state: Any) -> Result[A]:
        return parse_fn(cursor, state).set_label(x)

    return label
