import logging
from typing import Any, Iterable, List

import pytest

from incparsec import (
    BufferLimitExceeded, Done, Failed, IncrementalParser, NeedsMoreInput,
    PartialSource, ParseError, resume, run_partial
)
from incparsec.output import ParseResult
from incparsec.parser import Parser
from incparsec.partial import PartialResult
from incparsec.sequence import digit, eof, letter, satisfy, sym
from incparsec.text import incremental, run, string

from .parsers import expr, json

keywords = string("foo").attempt() | string("fob")
peeked = string("ab").lookahead() >> letter.many().fmap("".join)
pairs = (letter + digit).many() << eof()

DATA = [
    (expr.parser, "1"),
    (expr.parser, "12 + 345"),
    (expr.parser, "(1 + 2) * 3 - 40"),
    (expr.parser, "1 + "),
    (expr.parser, "1 1"),
    (json.json, '{"a": [1, 2.5, -3e2], "b": {"c": null}}'),
    (json.json, '[true, false, "x\\u0041\\n"]'),
    (json.json, '[1, 2'),
    (json.json, '{"a" 1}'),
    (json.json, 'tru'),
    (json.json, ''),
    (keywords, "foo"),
    (keywords, "fob"),
    (keywords, "fox"),
    (peeked, "abc"),
    (peeked, "ac"),
    (pairs, "a1b2c3"),
    (pairs, "a1b"),
    (eof(), ""),
    (eof(), "x"),
    (digit.many1().recognize() << sym(";"), "123;"),
    (string("abc"), "abx"),
]


def splits(data: str) -> List[List[str]]:
    chunks = [[data[:i], data[i:]] for i in range(len(data) + 1)]
    chunks.append(list(data))
    return chunks


def feed_all(
        parser: Parser[str, Any],
        chunks: Iterable[str]) -> PartialResult[str, Any]:
    p = incremental(parser)
    for chunk in chunks:
        p.feed(chunk)
    return p.finish()


def check_same(
        expected: ParseResult[Any],
        result: PartialResult[str, Any]) -> None:
    if expected.ok:
        assert type(result) is Done
        assert result.value == expected.unwrap()
        assert result.loc == expected.loc
    else:
        assert type(result) is Failed
        assert result.errors == expected.errors


@pytest.mark.parametrize("parser, data", DATA)
def test_split_equivalence(parser: Parser[str, Any], data: str) -> None:
    expected = run(parser, data)
    for chunks in splits(data):
        check_same(expected, feed_all(parser, chunks))


def test_json_value() -> None:
    result = feed_all(json.json, ['{"a": [1, 2', '.5, -3e2], "b": ', "{}}"])
    assert result.unwrap() == {"a": [1, 2.5, -300.0], "b": {}}


def test_no_repeated_side_effects() -> None:
    calls: List[str] = []

    def record(c: str) -> str:
        calls.append(c)
        return c

    parser = (
        satisfy(str.isdigit).fmap(record).many() + string("end").fmap(record)
    )
    feed_all(parser, "12345end")
    assert calls == ["1", "2", "3", "4", "5", "end"]


def test_suspend_and_resume() -> None:
    source: PartialSource[str] = PartialSource()
    cursor = source.cursor()
    source.feed("12")
    r = run_partial(digit.many(), cursor)
    assert type(r) is NeedsMoreInput
    assert r.needed == 1
    assert r.token.loc.pos == 2
    source.feed("3")
    source.finish()
    r = resume(r.token, cursor)
    assert type(r) is Done
    assert r.value == ["1", "2", "3"]
    assert r.loc.pos == 3


def test_needed_for_string() -> None:
    p = incremental(string("hello"))
    r = p.feed("he")
    assert type(r) is NeedsMoreInput
    assert r.needed == 3
    assert r.token.loc.pos == 0
    assert p.feed("llo").unwrap() == "hello"


def test_eof_needs_finish() -> None:
    p = incremental(eof())
    assert type(p.result) is NeedsMoreInput
    assert type(p.finish()) is Done


def test_definite_failure_before_finish() -> None:
    p = incremental(sym("a"))
    r = p.feed("b")
    assert type(r) is Failed
    assert r.errors.expected == ["'a'"]
    with pytest.raises(ParseError) as err:
        r.unwrap()
    assert str(err.value) == "at 0: unexpected 'b', expected 'a'"


def test_result_is_kept_after_done() -> None:
    p = incremental(sym("a"))
    assert p.feed("a").unwrap() == "a"
    assert p.feed("b").unwrap() == "a"
    assert p.finish().unwrap() == "a"


def test_needs_more_input_unwrap() -> None:
    p = incremental(sym("a"))
    with pytest.raises(ParseError):
        p.result.unwrap()


def test_failure_at_end_of_input() -> None:
    p = incremental(string("abc"))
    p.feed("ab")
    r = p.finish()
    assert type(r) is Failed
    assert r.errors.loc.pos == 0
    assert r.errors.unexpected == ["'ab'"]


def test_items_are_evicted() -> None:
    p: IncrementalParser[str, List[str]] = IncrementalParser(digit.many())
    for _ in range(1000):
        p.feed("7")
        assert len(p.source.ring) <= 1
    r = p.finish()
    assert type(r) is Done
    assert len(r.value) == 1000


def test_retained_while_backtracking_is_possible() -> None:
    p = IncrementalParser((sym("a").many() + sym("b")).attempt())
    p.feed("aaaa")
    assert len(p.source.ring) == 4
    assert p.feed("b").unwrap() == (["a", "a", "a", "a"], "b")


def test_max_retained() -> None:
    p = IncrementalParser(digit.many().recognize(), max_retained=2)
    with pytest.raises(BufferLimitExceeded):
        p.feed("1234")


def test_logging(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="incparsec")
    p = incremental(digit.many())
    p.feed("12")
    p.finish()
    assert "Suspended at" in caplog.text
    assert "Resuming at" in caplog.text
    assert "Evicted items" in caplog.text


def test_recognize_across_chunks() -> None:
    p = incremental(digit.many1().recognize() << sym(";"))
    p.feed("12")
    p.feed("3;")
    r = p.finish()
    assert type(r) is Done
    assert r.value == "123"
