"""
Simple lexer based on regular expressions.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Pattern, Sequence, TypeVar

from .core.buffer import BufferedCursor
from .core.types import Loc
from .output import ParseResult
from .parser import ParseObj, TupleParser, label, run as _run
from .sequence import satisfy

__all__ = (
    "Token", "LexError", "iter_tokens", "split_tokens", "stream_tokens",
    "token", "run"
)

V = TypeVar("V")


@dataclass(frozen=True)
class Token:
    """
    Token

    :param kind: Name of capture group from lexer spec
    :param value: Value of token
    :param start: Start location
    :param end: End location
    """

    kind: str
    value: str
    start: Loc = field(default=Loc(0, 0, 0), repr=False, compare=False)
    end: Loc = field(default=Loc(0, 0, 0), repr=False, compare=False)


class LexError(Exception):
    """
    Exception that is raised if a lexer was unable to process the input.

    :param loc: Location of error
    """

    def __init__(self, loc: Loc):
        super().__init__(loc)
        self.loc = loc

    def __str__(self) -> str:
        return "Lexing error at {}:{}".format(
            self.loc.line + 1, self.loc.col + 1
        )


def iter_tokens(src: str, spec: Pattern[str]) -> Iterator[Token]:
    """
    Lazily splits input string into tokens.

    :param src: Input
    :param spec: Compiled regular expression
    :raise: :exc:`LexError`
    """

    pos = 0
    line = 0
    col = 0
    loc = Loc(0, 0, 0)
    src_len = len(src)
    while pos < src_len:
        match = spec.match(src, pos=pos)
        if match is None or match.end() == pos:
            raise LexError(loc)

        end = match.end()
        nl = src.count("\n", pos, end)
        if nl:
            line += nl
            col = end - src.rfind("\n", pos, end) - 1
        else:
            col += end - pos
        end_loc = Loc(end, line, col)

        kind = match.lastgroup
        if kind is not None:
            yield Token(kind, match.group(kind), loc, end_loc)

        pos = end
        loc = end_loc


def split_tokens(src: str, spec: Pattern[str]) -> List[Token]:
    """
    Splits input string into list of tokens.

    The lexer specification is a compiled regular expressions with named
    capture groups for individual tokens. Only the last capture group is taken
    into account. If no capture group matches, the token is skipped.

    >>> from incparsec.lexer import split_tokens
    >>> import re

    >>> spec = re.compile(r"(?P<num>[0-9]+)|(?P<op>[+])|\\s+")

    >>> split_tokens("1 + 2 + 3", spec)  # doctest: +NORMALIZE_WHITESPACE
    [Token(kind='num', value='1'), Token(kind='op', value='+'),
     Token(kind='num', value='2'), Token(kind='op', value='+'),
     Token(kind='num', value='3')]

    :param src: Input
    :param spec: Compiled regular expression
    """

    return list(iter_tokens(src, spec))


def _advance_loc(loc: Loc, tok: Token) -> Loc:
    return Loc(loc.pos + 1, tok.end.line, tok.end.col)


def stream_tokens(
        src: str, spec: Pattern[str],
        max_retained: Optional[int] = None) -> BufferedCursor[Token]:
    """
    Returns a cursor that lexes ``src`` on demand. Tokens are kept only while
    the parser may still backtrack to them.

    >>> from incparsec.lexer import stream_tokens, token
    >>> import re

    >>> spec = re.compile(r"(?P<num>[0-9]+)|(?P<op>[+])|\\s+")
    >>> parser = token("num").many()

    >>> parser.parse(stream_tokens("1 2 3", spec)).unwrap()
    ... # doctest: +NORMALIZE_WHITESPACE
    [Token(kind='num', value='1'), Token(kind='num', value='2'),
     Token(kind='num', value='3')]

    :param src: Input
    :param spec: Compiled regular expression
    :param max_retained: Maximal number of retained tokens
    """

    return BufferedCursor(
        iter_tokens(src, spec), max_retained, advance_loc=_advance_loc
    )


def token(kind: str) -> TupleParser[Token, Token]:
    """
    Parses token of the specified kind and returns the token.

    >>> from incparsec.lexer import run, split_tokens, token
    >>> import re

    >>> spec = re.compile(r"(?P<num>[0-9]+)|(?P<op>[+])")
    >>> parser = token("num")

    >>> run(parser, split_tokens("1", spec)).unwrap()
    Token(kind='num', value='1')

    >>> run(parser, split_tokens("+", spec)).unwrap()
    Traceback (most recent call last):
      ...
    incparsec.output.ParseError: at 1:1: unexpected Token(kind='op', value='+'), expected num

    :param kind: Kind of expected token
    """

    return label(satisfy(lambda t: t.kind == kind), kind)


def run(parser: ParseObj[Token, V], stream: Sequence[Token]) -> ParseResult[V]:
    """
    Wrapper around :func:`incparsec.parser.run` that reports errors at line
    and column of the offending token.

    :param parser: Parser to run
    :param stream: Tokens to parse
    """

    def fmt_loc(loc: Loc) -> str:
        start = _loc_from_stream(stream, loc.pos)
        return "{}:{}".format(start.line + 1, start.col + 1)

    return _run(parser, stream, fmt_loc=fmt_loc)


def _loc_from_stream(stream: Sequence[Token], pos: int) -> Loc:
    if pos < len(stream):
        return stream[pos].start
    elif stream:
        return stream[-1].end
    return Loc(pos, 0, 0)
