from typing import Callable, NamedTuple, TypeVar

T_contra = TypeVar("T_contra", contravariant=True)


class Loc(NamedTuple):
    pos: int
    line: int
    col: int


AdvanceLoc = Callable[[Loc, T_contra], Loc]


def advance_pos(loc: Loc, item: object) -> Loc:
    return Loc(loc.pos + 1, loc.line, loc.col)


def fmt_pos(loc: Loc) -> str:
    return repr(loc.pos)
