"""
Parser combinators.
"""

from typing import (
    Any, Callable, List, Optional, Sequence, Tuple, Type, TypeVar, Union
)

from .core import combinators
from .core.cursor import Cursor, SequenceCursor
from .core.parser import ParseFn, ParseObj
from .core.result import Incomplete, Result
from .core.types import AdvanceLoc, Loc, advance_pos, fmt_pos
from .output import ParseResult

S = TypeVar("S")
S_contra = TypeVar("S_contra", contravariant=True)
A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)
B = TypeVar("B")
C = TypeVar("C")


class Parser(ParseObj[S_contra, A_co]):
    def parse(
            self, stream: Union[Sequence[S_contra], Cursor[S_contra]], *,
            advance_loc: AdvanceLoc[S_contra] = advance_pos,
            fmt_loc: Callable[[Loc], str] = fmt_pos
    ) -> ParseResult[A_co]:
        """
        Parses input. See :func:`run`.

        :param stream: Input sequence or cursor to parse
        :param advance_loc: Function that computes a location after an item
        :param fmt_loc: Function that converts ``Loc`` to string
        """

        return run(self, stream, advance_loc=advance_loc, fmt_loc=fmt_loc)

    def fmap(self, fn: Callable[[A_co], B]) -> "TupleParser[S_contra, B]":
        """
        Transforms the result of the parser by applying ``fn`` to it.

        >>> from incparsec.sequence import satisfy

        >>> satisfy(str.isdigit).fmap(lambda x: int(x) + 1).parse("0").unwrap()
        1

        :param fn: Function to produce new value from the result of the parser
        """

        return fmap(self, fn)

    def try_fmap(
            self, fn: Callable[[A_co], B],
            *exceptions: Type[Exception]) -> "TupleParser[S_contra, B]":
        """
        Transforms the result of the parser by applying ``fn`` to it. If
        ``fn`` raises one of ``exceptions``, the parser fails and the
        exception is kept in the error as an opaque cause.

        >>> from incparsec.sequence import satisfy

        >>> parser = satisfy(str.isalnum).try_fmap(int, ValueError)

        >>> parser.parse("7").unwrap()
        7
        >>> parser.parse("x").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 0: invalid literal for int() with base 10: 'x'

        :param fn: Function to produce new value from the result of the parser
        :param exceptions: Exception types to catch, ``ValueError`` if empty
        """

        return try_fmap(self, fn, *exceptions)

    def bind(
            self, fn: Callable[[A_co], ParseObj[S_contra, B]]
    ) -> "TupleParser[S_contra, B]":
        """
        Chooses the next parser from the value of this one.

        >>> from incparsec.sequence import letter, sym

        >>> parser = letter.bind(lambda c: sym(c.upper()))

        >>> parser.parse("aA").unwrap()
        'A'
        >>> parser.parse("ab").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 1: unexpected 'b', expected 'A'

        :param fn: Function that returns the next parser
        """

        return bind(self, fn)

    and_then = bind

    def seql(
            self,
            other: ParseObj[S_contra, B]) -> "TupleParser[S_contra, A_co]":
        """
        Same as ``self << other``.
        """

        return seql(self, other)

    skip = seql

    def seqr(self, other: ParseObj[S_contra, B]) -> "TupleParser[S_contra, B]":
        """
        Same as ``self >> other``.
        """

        return seqr(self, other)

    def __lshift__(
            self, other: ParseObj[S_contra, B]
    ) -> "TupleParser[S_contra, A_co]":
        """
        Runs ``other`` after the parser and keeps the value of the parser.

        >>> from incparsec.sequence import digit, sym

        >>> (digit << sym(";")).parse("7;").unwrap()
        '7'
        """

        return seql(self, other)

    def __rshift__(
            self, other: ParseObj[S_contra, B]
    ) -> "TupleParser[S_contra, B]":
        """
        Runs ``other`` after the parser and keeps the value of ``other``.
        """

        return seqr(self, other)

    def __add__(
            self, other: ParseObj[S_contra, B]
    ) -> "TupleParser[S_contra, Tuple[A_co, B]]":
        """
        Runs the parser and then ``other``, pairing their values. Use
        :meth:`TupleParser.then` for longer tuples.

        >>> from incparsec.sequence import digit, letter

        >>> parser = digit + letter

        >>> parser.parse("1x").unwrap()
        ('1', 'x')
        >>> parser.parse("12").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 1: unexpected '2', expected letter
        """

        return seq(self, other)

    def __or__(
            self, other: ParseObj[S_contra, B]
    ) -> "TupleParser[S_contra, Union[A_co, B]]":
        """
        Ordered choice. ``other`` is tried only when the parser fails before
        consuming anything; a failure after that is final unless the parser
        is wrapped with :meth:`attempt`. Expected items of both branches are
        reported together.

        >>> from incparsec.sequence import digit, sym

        >>> parser = digit | sym("-")

        >>> parser.parse("-").unwrap()
        '-'
        >>> parser.parse("x").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 0: unexpected 'x', expected digit or '-'
        """

        return alt(self, other)

    def maybe(self) -> "TupleParser[S_contra, Optional[A_co]]":
        """
        Optional parser: ``None`` when it fails without consuming input.
        """

        return maybe(self)

    def many(self) -> "TupleParser[S_contra, List[A_co]]":
        """
        Collects values of the parser until it fails without consuming
        input. A failure in the middle of an item fails the whole repetition.

        >>> from incparsec.sequence import digit, sym

        >>> parser = (digit << sym(",")).many()

        >>> parser.parse("1,2,x").unwrap()
        ['1', '2']
        >>> parser.parse("1,2").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 3: unexpected end of input, expected ','
        """

        return many(self)

    def many1(self) -> "TupleParser[S_contra, List[A_co]]":
        """
        :meth:`many` that needs at least one value.
        """

        return many1(self)

    def attempt(self) -> "TupleParser[S_contra, A_co]":
        """
        Makes a failure of the parser look like it consumed nothing, so that
        an enclosing choice can try the next branch from the same place. The
        input read by the parser stays retained until it finishes.

        >>> from incparsec.text import string

        >>> (string("let") | string("lambda")).parse("lambda").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 0: unexpected 'la', expected 'let'
        >>> keyword = string("let").attempt() | string("lambda")
        >>> keyword.parse("lambda").unwrap()
        'lambda'
        """

        return attempt(self)

    def lookahead(self) -> "TupleParser[S_contra, A_co]":
        """
        Applies the parser and moves the cursor back to where it started,
        whatever the outcome. Never consumes input.

        >>> from incparsec.sequence import sym

        >>> parser = sym("a").lookahead() + sym("a")

        >>> parser.parse("a").unwrap()
        ('a', 'a')
        """

        return lookahead(self)

    def recognize(self) -> "TupleParser[S_contra, Sequence[S_contra]]":
        """
        Applies the parser and returns the slice of input it consumed instead
        of its value.

        >>> from incparsec.sequence import digit

        >>> digit.many1().recognize().parse("123a").unwrap()
        '123'
        """

        return recognize(self)

    def label(self, expected: str) -> "TupleParser[S_contra, A_co]":
        """
        Names what the parser expects in error messages. The name replaces
        the expected items only when the parser fails without consuming
        input.

        >>> from incparsec.sequence import digit

        >>> digit.many1().label("number").parse("x").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 0: unexpected 'x', expected number

        :param expected: Name of the expected input
        """

        return label(self, expected)

    def sep_by(
            self,
            sep: ParseObj[S_contra, B]) -> "TupleParser[S_contra, List[A_co]]":
        """
        Zero or more values of the parser separated by ``sep``. Values of
        ``sep`` are dropped.

        >>> from incparsec.sequence import digit, sym

        >>> parser = digit.sep_by(sym(","))

        >>> parser.parse("1,2,3").unwrap()
        ['1', '2', '3']
        >>> parser.parse("").unwrap()
        []
        """

        return sep_by(self, sep)

    def sep_by1(
            self,
            sep: ParseObj[S_contra, B]) -> "TupleParser[S_contra, List[A_co]]":
        """
        :meth:`sep_by` that needs at least one value.
        """

        return sep_by1(self, sep)

    def between(
            self, open: ParseObj[S_contra, B],
            close: ParseObj[S_contra, C]) -> "TupleParser[S_contra, A_co]":
        """
        Wraps the parser in ``open`` and ``close``, keeping only its value.
        Note that :func:`between` takes the brackets first:
        ``p.between(open, close)`` is ``between(open, close, p)``.

        >>> from incparsec.sequence import digit, sym

        >>> digit.between(sym("["), sym("]")).parse("[5]").unwrap()
        '5'
        """

        return between(open, close, self)

    def chainl1(
            self, op: ParseObj[S_contra, Callable[[A_co, A_co], A_co]]
    ) -> "TupleParser[S_contra, A_co]":
        """
        One or more values of the parser separated by ``op``, folded from the
        left with the functions ``op`` returns.

        >>> from incparsec.sequence import digit, sym

        >>> parser = digit.fmap(int).chainl1(
        ...     sym("-").fmap(lambda _: lambda a, b: a - b)
        ... )

        >>> parser.parse("9-3-2").unwrap()
        4

        :param op: Parser of the folding function
        """

        return chainl1(self, op)

    def chainr1(
            self, op: ParseObj[S_contra, Callable[[A_co, A_co], A_co]]
    ) -> "TupleParser[S_contra, A_co]":
        """
        :meth:`chainl1` that folds from the right.
        """

        return chainr1(self, op)


class TupleParser(Parser[S_contra, A]):
    """
    A subclass of :class:`Parser` with ability to build a tuple of up to four
    results.
    """

    def then(
            self, other: ParseObj[S_contra, B]) -> "Tuple2[S_contra, A, B]":
        """
        Applies up to four parsers sequentially and returns a tuple of their
        results.

        >>> from incparsec.sequence import sym

        >>> parser = sym("a").then(sym("b")).then(sym("c"))

        >>> parser.parse("abc").unwrap()
        ('a', 'b', 'c')
        >>> parser.parse("ac").unwrap()
        Traceback (most recent call last):
          ...
        incparsec.output.ParseError: at 1: unexpected 'c', expected 'b'

        :param other: Next parser
        """

        return _Tuple2(combinators.seq(self.to_fn(), other.to_fn()))


class _FnParseObj(ParseObj[S_contra, A_co]):
    def __init__(self, fn: ParseFn[S_contra, A_co]):
        self._fn = fn

    def to_fn(self) -> ParseFn[S_contra, A_co]:
        return self._fn

    def parse_fn(
            self, cursor: Cursor[S_contra], state: Any) -> Result[A_co]:
        return self._fn(cursor, state)


class FnParser(_FnParseObj[S_contra, A_co], TupleParser[S_contra, A_co]):
    pass


A0 = TypeVar("A0")
A1 = TypeVar("A1")
A2 = TypeVar("A2")
A3 = TypeVar("A3")


class Tuple2(Parser[S_contra, Tuple[A0, A1]]):
    """
    A subclass of :class:`Parser` that always returns tuples of two values.
    """

    def then(
            self,
            other: ParseObj[S_contra, A2]) -> "Tuple3[S_contra, A0, A1, A2]":
        """
        See :meth:`TupleParser.then`.

        :param other: Next parser
        """

        return _Tuple3(combinators.tuple3(self.to_fn(), other.to_fn()))

    def apply(self, fn: Callable[[A0, A1], B]) -> TupleParser[S_contra, B]:
        """
        Applies ``fn`` to elements of parsed tuple.

        :param fn: Function to apply
        """

        return fmap(self, lambda t: fn(*t))


class _Tuple2(_FnParseObj[S_contra, Tuple[A0, A1]], Tuple2[S_contra, A0, A1]):
    pass


class Tuple3(Parser[S_contra, Tuple[A0, A1, A2]]):
    """
    A subclass of :class:`Parser` that always returns tuples of three values.
    """

    def then(
        self, other: ParseObj[S_contra, A3]
    ) -> "Tuple4[S_contra, A0, A1, A2, A3]":
        """
        See :meth:`TupleParser.then`.

        :param other: Next parser
        """

        return _Tuple4(combinators.tuple4(self.to_fn(), other.to_fn()))

    def apply(self, fn: Callable[[A0, A1, A2], B]) -> TupleParser[S_contra, B]:
        """
        Applies ``fn`` to elements of parsed tuple.

        :param fn: Function to apply
        """

        return fmap(self, lambda t: fn(*t))


class _Tuple3(
        _FnParseObj[S_contra, Tuple[A0, A1, A2]],
        Tuple3[S_contra, A0, A1, A2]):
    pass


class Tuple4(Parser[S_contra, Tuple[A0, A1, A2, A3]]):
    """
    A subclass of :class:`Parser` that always returns tuples of four values.
    """

    def apply(
            self,
            fn: Callable[[A0, A1, A2, A3], B]) -> TupleParser[S_contra, B]:
        """
        Applies ``fn`` to elements of parsed tuple.

        :param fn: Function to apply
        """

        return fmap(self, lambda t: fn(*t))


class _Tuple4(
        _FnParseObj[S_contra, Tuple[A0, A1, A2, A3]],
        Tuple4[S_contra, A0, A1, A2, A3]):
    pass


class Delay(TupleParser[S_contra, A_co]):
    """
    A subclass of :class:`TupleParser` to use as a forward declaration.

    >>> from incparsec import Delay
    >>> from incparsec.sequence import sym

    >>> parser = Delay()
    >>> parser.define((sym("a") + parser).maybe())

    >>> parser.parse("aaa").unwrap()
    ('a', ('a', ('a', None)))
    """

    def __init__(self) -> None:
        def _fn(cursor: Cursor[S_contra], state: Any) -> Result[A_co]:
            raise RuntimeError("Delayed parser was not defined")

        self._defined = False
        self._fn: ParseFn[S_contra, A_co] = _fn

    def define(self, parser: ParseObj[S_contra, A_co]) -> None:
        """
        Define the parser.

        >>> from incparsec import Delay
        >>> from incparsec.sequence import sym

        >>> parser = Delay()
        >>> parser.parse("a")
        Traceback (most recent call last):
          ...
        RuntimeError: Delayed parser was not defined

        >>> parser.define(sym("a"))
        >>> parser.parse("a").unwrap()
        'a'

        :param parser: Parser definition
        """

        if self._defined:
            raise RuntimeError("Delayed parser was already defined")
        self._defined = True
        self._fn = parser.to_fn()

    def parse_fn(
            self, cursor: Cursor[S_contra], state: Any) -> Result[A_co]:
        return self._fn(cursor, state)

    def to_fn(self) -> ParseFn[S_contra, A_co]:
        if self._defined:
            return self._fn
        return super().to_fn()


def run(
        parser: ParseObj[S, A], stream: Union[Sequence[S], Cursor[S]], *,
        advance_loc: AdvanceLoc[S] = advance_pos,
        fmt_loc: Callable[[Loc], str] = fmt_pos) -> ParseResult[A]:
    """
    Runs ``parser`` to completion.

    ``stream`` is either a sequence, which is wrapped into a
    :class:`~incparsec.core.cursor.SequenceCursor`, or a cursor. On success,
    the result holds the value and the location of the remaining input; the
    cursor is left at that location.

    >>> from incparsec.parser import run
    >>> from incparsec.sequence import sym

    >>> result = run(sym("a"), "ab")
    >>> result.unwrap(), result.loc.pos
    ('a', 1)

    :param parser: Parser to run
    :param stream: Input sequence or cursor
    :param advance_loc: Function that computes a location after an item,
        ignored if ``stream`` is a cursor
    :param fmt_loc: Function that converts ``Loc`` to string
    :raise: :exc:`ValueError` if the cursor is partial
    """

    if isinstance(stream, Cursor):
        cursor: Cursor[S] = stream
    else:
        cursor = SequenceCursor(stream, advance_loc=advance_loc)
    if cursor.is_partial():
        raise ValueError("Partial cursors are handled by run_partial()")
    result = parser.parse_fn(cursor, None)
    if type(result) is Incomplete:
        raise RuntimeError("Incomplete result for non-partial cursor")
    return ParseResult(result, cursor.loc, fmt_loc)


def fmap(parser: ParseObj[S, A], fn: Callable[[A], B]) -> TupleParser[S, B]:
    """
    :meth:`Parser.fmap` as a function.

    :param parser: Parser
    :param fn: Function to produce value from the result of ``parser``
    """

    return FnParser(combinators.fmap(parser.to_fn(), fn))


def try_fmap(
        parser: ParseObj[S, A], fn: Callable[[A], B],
        *exceptions: Type[Exception]) -> TupleParser[S, B]:
    """
    :meth:`Parser.try_fmap` as a function.

    :param parser: Parser
    :param fn: Function to produce value from the result of ``parser``
    :param exceptions: Exception types to catch, ``ValueError`` if empty
    """

    return FnParser(
        combinators.try_fmap(parser.to_fn(), fn, exceptions or (ValueError,))
    )


def bind(
        parser: ParseObj[S, A],
        fn: Callable[[A], ParseObj[S, B]]) -> TupleParser[S, B]:
    """
    :meth:`Parser.bind` as a function.

    :param parser: Parser
    :param fn: Function that returns a new parser using the result of the
        parser
    """

    return FnParser(combinators.bind(parser.to_fn(), fn))


and_then = bind


def seq(
        parser: ParseObj[S, A],
        second: ParseObj[S, B]) -> TupleParser[S, Tuple[A, B]]:
    """
    :meth:`Parser.__add__` as a function.

    :param parser: First parser
    :param second: Second parser
    """

    return FnParser(combinators.seq(parser.to_fn(), second.to_fn()))


def seql(parser: ParseObj[S, A], second: ParseObj[S, B]) -> TupleParser[S, A]:
    """
    :meth:`Parser.seql` as a function.

    :param parser: First parser
    :param second: Second parser
    """

    return FnParser(combinators.seql(parser.to_fn(), second.to_fn()))


def seqr(parser: ParseObj[S, A], second: ParseObj[S, B]) -> TupleParser[S, B]:
    """
    :meth:`Parser.seqr` as a function.

    :param parser: First parser
    :param second: Second parser
    """

    return FnParser(combinators.seqr(parser.to_fn(), second.to_fn()))


def alt(
        parser: ParseObj[S, A],
        second: ParseObj[S, B]) -> TupleParser[S, Union[A, B]]:
    """
    :meth:`Parser.__or__` as a function.

    :param parser: First parser
    :param second: Second parser
    """

    return FnParser(combinators.alt(parser.to_fn(), second.to_fn()))


def maybe(parser: ParseObj[S, A]) -> TupleParser[S, Optional[A]]:
    """
    :meth:`Parser.maybe` as a function.
    """

    return FnParser(combinators.maybe(parser.to_fn()))


def many(parser: ParseObj[S, A]) -> TupleParser[S, List[A]]:
    """
    :meth:`Parser.many` as a function.
    """

    return FnParser(combinators.many(parser.to_fn()))


def many1(parser: ParseObj[S, A]) -> TupleParser[S, List[A]]:
    """
    :meth:`Parser.many1` as a function.
    """

    return FnParser(combinators.many1(parser.to_fn()))


def attempt(parser: ParseObj[S, A]) -> TupleParser[S, A]:
    """
    :meth:`Parser.attempt` as a function.
    """

    return FnParser(combinators.attempt(parser.to_fn()))


def lookahead(parser: ParseObj[S, A]) -> TupleParser[S, A]:
    """
    :meth:`Parser.lookahead` as a function.
    """

    return FnParser(combinators.lookahead(parser.to_fn()))


def recognize(parser: ParseObj[S, Any]) -> TupleParser[S, Sequence[S]]:
    """
    :meth:`Parser.recognize` as a function.
    """

    return FnParser(combinators.recognize(parser.to_fn()))


def label(parser: ParseObj[S, A], expected: str) -> TupleParser[S, A]:
    """
    :meth:`Parser.label` as a function.

    :param parser: Parser
    :param expected: Description of the expected input
    """

    return FnParser(combinators.label(parser.to_fn(), expected))


def sep_by(
        parser: ParseObj[S, A],
        sep: ParseObj[S, B]) -> TupleParser[S, List[A]]:
    """
    :meth:`Parser.sep_by` as a function.

    :param parser: Items parser
    :param sep: Separators parser
    """

    return maybe(sep_by1(parser, sep)).fmap(lambda v: [] if v is None else v)


def sep_by1(
        parser: ParseObj[S, A],
        sep: ParseObj[S, B]) -> TupleParser[S, List[A]]:
    """
    :meth:`Parser.sep_by1` as a function.

    :param parser: Items parser
    :param sep: Separators parser
    """

    return seq(parser, many(seqr(sep, parser))).fmap(
        lambda v: [v[0]] + v[1]
    )


def between(
        open: ParseObj[S, B], close: ParseObj[S, C],
        parser: ParseObj[S, A]) -> TupleParser[S, A]:
    """
    :meth:`Parser.between` as a function. The brackets come first so that
    a pair of them can be bound once with :func:`functools.partial`.

    :param open: Parser of the opening bracket
    :param close: Parser of the closing bracket
    :param parser: Parser of the value
    """

    return seqr(open, seql(parser, close))


def chainl1(
        arg: ParseObj[S, A],
        op: ParseObj[S, Callable[[A, A], A]]) -> TupleParser[S, A]:
    """
    :meth:`Parser.chainl1` as a function.

    :param arg: Argument parser
    :param op: Operator parser
    """

    def reducer(v: Tuple[A, List[Tuple[Callable[[A, A], A], A]]]) -> A:
        res, tail = v
        for op, arg in tail:
            res = op(res, arg)
        return res

    return fmap(seq(arg, many(seq(op, arg))), reducer)


def chainr1(
        arg: ParseObj[S, A],
        op: ParseObj[S, Callable[[A, A], A]]) -> TupleParser[S, A]:
    """
    :meth:`Parser.chainr1` as a function.

    :param arg: Argument parser
    :param op: Operator parser
    """

    def reducer(v: Tuple[A, List[Tuple[Callable[[A, A], A], A]]]) -> A:
        res, tail = v
        rassoc: List[Tuple[A, Callable[[A, A], A]]] = []
        for op, arg in tail:
            rassoc.append((res, op))
            res = arg
        for arg, op in reversed(rassoc):
            res = op(arg, res)
        return res

    return fmap(seq(arg, many(seq(op, arg))), reducer)
