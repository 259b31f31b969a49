from incparsec import (
    END_OF_INPUT, Errors, Expected, Item, Label, Loc, Message, Unexpected,
    expect, merge
)


def loc(pos: int) -> Loc:
    return Loc(pos, 0, pos)


def test_merge_furthest_wins() -> None:
    near = Errors(loc(1), [Expected(Label("near"))])
    far = Errors(loc(3), [Expected(Label("far"))])
    assert merge(near, far) == far
    assert merge(far, near) == far


def test_merge_same_location_unions_items() -> None:
    fst = Errors(loc(2), [Unexpected(Item("x")), Expected(Label("a"))])
    snd = Errors(loc(2), [Unexpected(Item("x")), Expected(Label("b"))])
    merged = merge(fst, snd)
    assert merged.loc == loc(2)
    assert merged.unexpected == ["'x'"]
    assert merged.expected == ["a", "b"]
    assert set(merge(snd, fst).items) == set(merged.items)


def test_merge_with_empty() -> None:
    fst = Errors(loc(0), [Message(Label("boom"))])
    assert merge(fst, Errors(loc(0))) == fst
    assert merge(Errors(loc(0)), fst).items == fst.items


def test_duplicates_are_dropped() -> None:
    errors = Errors(loc(0), [Expected(Label("a")), Expected(Label("a"))])
    assert errors.expected == ["a"]
    assert errors.add(Expected(Label("a"))).expected == ["a"]


def test_items_are_kept_apart() -> None:
    errors = Errors(loc(0), [Expected(Label("0")), Expected(Item("0"))])
    assert errors.expected == ["0", "'0'"]


def test_expect_replaces_expected() -> None:
    errors = Errors(
        loc(4), [
            Unexpected(END_OF_INPUT), Expected(Item("a")),
            Expected(Item("b")), Message(Label("note"))
        ]
    )
    labelled = expect(errors, "letter")
    assert labelled.loc == loc(4)
    assert labelled.unexpected == ["end of input"]
    assert labelled.expected == ["letter"]
    assert labelled.messages == ["note"]


def test_expect_without_expected_items() -> None:
    errors = Errors(loc(0), [Unexpected(Item("x"))])
    assert expect(errors, "digit").expected == ["digit"]
