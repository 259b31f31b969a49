from typing import Any, List

import pytest

from incparsec import Outcome, SequenceCursor
from incparsec.parser import Parser, run
from incparsec.primitive import Pure, PureFn
from incparsec.sequence import sym
from incparsec.text import string

a = sym("a")
b = sym("b")

DATA = [
    (a, "a", Outcome.CONSUMED_OK),
    (a, "b", Outcome.EMPTY_ERR),
    (a, "", Outcome.EMPTY_ERR),
    (Pure("x"), "", Outcome.EMPTY_OK),
    (a + b, "ab", Outcome.CONSUMED_OK),
    (a + b, "ac", Outcome.CONSUMED_ERR),
    ((a + b).attempt(), "ac", Outcome.EMPTY_ERR),
    ((a + b) | Pure("x"), "ac", Outcome.CONSUMED_ERR),
    ((a + b).attempt() | Pure("x"), "ac", Outcome.EMPTY_OK),
    (a.maybe(), "b", Outcome.EMPTY_OK),
    (a.many(), "aab", Outcome.CONSUMED_OK),
    (a.many(), "b", Outcome.EMPTY_OK),
    ((a + b).many(), "aba", Outcome.CONSUMED_ERR),
    (a.many1(), "b", Outcome.EMPTY_ERR),
    (a.lookahead(), "a", Outcome.EMPTY_OK),
    ((a + b).lookahead(), "ac", Outcome.EMPTY_ERR),
    (a.recognize(), "a", Outcome.CONSUMED_OK),
    (string("ab"), "ac", Outcome.CONSUMED_ERR),
    (string("ab"), "b", Outcome.EMPTY_ERR),
    (a.label("x"), "b", Outcome.EMPTY_ERR),
    (a.bind(lambda _: b), "ac", Outcome.CONSUMED_ERR),
    (Pure("x").bind(lambda _: b), "c", Outcome.EMPTY_ERR),
]


@pytest.mark.parametrize("parser, data, kind", DATA)
def test_outcome(parser: Parser[str, Any], data: str, kind: Outcome) -> None:
    cursor = SequenceCursor(data)
    r = parser.parse_fn(cursor, None)
    assert r.kind is kind


@pytest.mark.parametrize("parser, data, kind", DATA)
def test_consumed_moves_cursor(
        parser: Parser[str, Any], data: str, kind: Outcome) -> None:
    cursor = SequenceCursor(data)
    r = parser.parse_fn(cursor, None)
    assert r.consumed == (cursor.loc.pos > 0)


def counter(calls: List[int]) -> Parser[str, str]:
    def value() -> str:
        calls.append(1)
        return "value"
    return PureFn(value)


def test_committed_choice_skips_alternative() -> None:
    calls: List[int] = []
    r = run((a + b) | counter(calls), "ac")
    assert not r.ok
    assert r.loc.pos == 1
    assert calls == []


def test_empty_failure_tries_alternative() -> None:
    calls: List[int] = []
    r = run((a + b) | counter(calls), "c")
    assert r.unwrap() == "value"
    assert calls == [1]


def test_attempt_restores_position() -> None:
    calls: List[int] = []
    r = run((a + b).attempt() | counter(calls), "ac")
    assert r.unwrap() == "value"
    assert r.loc.pos == 0
    assert calls == [1]


def test_attempt_keeps_error_location() -> None:
    r = run((a + b).attempt() | sym("x"), "ac")
    assert r.loc.pos == 1
    assert r.errors is not None
    assert r.errors.expected == ["'b'"]


def test_lookahead_does_not_consume() -> None:
    r = run(a.lookahead() >> a.recognize().fmap("".join), "ab")
    assert r.unwrap() == "a"
    assert r.loc.pos == 1


def test_label_keeps_consumed_errors() -> None:
    r = run((a + b).label("pair"), "ac")
    assert r.errors is not None
    assert r.errors.expected == ["'b'"]

    r = run((a + b).label("pair"), "c")
    assert r.errors is not None
    assert r.errors.expected == ["pair"]
