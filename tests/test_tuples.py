from typing import Any

import pytest

from incparsec import Done, Outcome, SequenceCursor
from incparsec.parser import Parser, run
from incparsec.primitive import Pure
from incparsec.sequence import digit, letter, sym
from incparsec.text import incremental, string

word = letter.many1().recognize()
number = digit.many1().recognize().fmap(int)
spaces = sym(" ").many()

assignment = (word << spaces << sym("=") << spaces).then(number)
triple = word.then(sym(":") >> number).then(sym(":") >> word)
record = (
    (string("rec") >> spaces >> word << sym(","))
    .then(number << sym(","))
    .then(word << sym(","))
    .then(number)
)

flipped = triple.apply(lambda name, n, tag: (tag, n, name))
total = record.apply(lambda _, x, __, y: x + y)


def test_pairs_and_triples() -> None:
    assert run(assignment, "x = 42").unwrap() == ("x", 42)
    assert run(triple, "ab:7:cd").unwrap() == ("ab", 7, "cd")
    assert run(flipped, "ab:7:cd").unwrap() == ("cd", 7, "ab")


def test_four_values() -> None:
    assert run(record, "rec a,1,b,22").unwrap() == ("a", 1, "b", 22)
    assert run(total, "rec a,1,b,22").unwrap() == 23


def test_first_value_is_kept_as_is() -> None:
    pair = Pure(("x", "y")).then(sym("z"))
    assert run(pair, "z").unwrap() == (("x", "y"), "z")


@pytest.mark.parametrize("parser, data, value", [
    (assignment, "width=640", ("width", 640)),
    (triple, "key:12:val", ("key", 12, "val")),
    (flipped, "key:12:val", ("val", 12, "key")),
    (record, "rec pt,3,qq,45", ("pt", 3, "qq", 45)),
    (total, "rec pt,3,qq,45", 48),
])
def test_values_from_chunks(
        parser: Parser[str, Any], data: str, value: Any) -> None:
    for i in range(len(data) + 1):
        p = incremental(parser)
        p.feed(data[:i])
        p.feed(data[i:])
        r = p.finish()
        assert type(r) is Done
        assert r.value == value


@pytest.mark.parametrize("data, kind, pos", [
    ("ab:7:cd", Outcome.CONSUMED_OK, 7),
    ("ab:x", Outcome.CONSUMED_ERR, 3),
    (":7:cd", Outcome.EMPTY_ERR, 0),
])
def test_outcome(data: str, kind: Outcome, pos: int) -> None:
    cursor = SequenceCursor(data)
    r = triple.parse_fn(cursor, None)
    assert r.kind is kind
    assert cursor.loc.pos == pos
