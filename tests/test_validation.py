import pytest

from incparsec import Delay, PartialSource
from incparsec.parser import run
from incparsec.primitive import Pure
from incparsec.sequence import eof, sym, tokens
from incparsec.text import string


def test_many_unconsumed() -> None:
    with pytest.raises(RuntimeError):
        eof().many().parse("")
    with pytest.raises(RuntimeError):
        Pure(1).many1().parse("a")


def test_string_empty() -> None:
    with pytest.raises(ValueError):
        string("")
    with pytest.raises(ValueError):
        tokens([])


def test_delay_undefined() -> None:
    parser: Delay[str, str] = Delay()
    with pytest.raises(RuntimeError):
        parser.parse("a")
    parser.define(sym("a"))
    with pytest.raises(RuntimeError):
        parser.define(sym("b"))


def test_run_partial_cursor() -> None:
    source: PartialSource[str] = PartialSource()
    with pytest.raises(ValueError):
        run(sym("a"), source.cursor())
