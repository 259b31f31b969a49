import re

import pytest

from incparsec import Loc, ParseError
from incparsec.lexer import (
    LexError, Token, run, split_tokens, stream_tokens, token
)
from incparsec.parser import run as run_cursor
from incparsec.sequence import eof

spec = re.compile(r"(?P<num>[0-9]+)|(?P<op>[-+*/])|\s+")

numbers = token("num").fmap(lambda t: int(t.value)).sep_by(token("op"))


def test_split_tokens() -> None:
    assert split_tokens("1 +\n22", spec) == [
        Token("num", "1"), Token("op", "+"), Token("num", "22")
    ]
    tokens = split_tokens("1 +\n22", spec)
    assert tokens[2].start == Loc(4, 1, 0)
    assert tokens[2].end == Loc(6, 1, 2)


def test_lex_error() -> None:
    with pytest.raises(LexError) as err:
        split_tokens("1 ?", spec)
    assert err.value.loc == Loc(2, 0, 2)
    assert str(err.value) == "Lexing error at 1:3"


def test_run() -> None:
    assert run(numbers, split_tokens("1 + 2 * 3", spec)).unwrap() == [1, 2, 3]


def test_run_error() -> None:
    with pytest.raises(ParseError) as err:
        run(token("num") << eof(), split_tokens("1 +", spec)).unwrap()
    assert str(err.value) == (
        "at 1:3: unexpected Token(kind='op', value='+'), "
        "expected end of input"
    )


def test_stream_tokens() -> None:
    cursor = stream_tokens("1 +\n22", spec, max_retained=2)
    r = run_cursor(numbers << eof(), cursor)
    assert r.unwrap() == [1, 22]
    assert r.loc == Loc(3, 1, 2)


def test_stream_lex_error() -> None:
    with pytest.raises(LexError):
        run_cursor(numbers, stream_tokens("1 + ?", spec))
