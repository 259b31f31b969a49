from typing import Callable, Generic, List, Optional, TypeVar, Union

from .core.errors import Errors
from .core.result import Error, Ok
from .core.types import Loc

V_co = TypeVar("V_co", covariant=True)
U = TypeVar("U")


def _fmt_list(items: List[str]) -> str:
    if len(items) == 1:
        return items[0]
    return "{} or {}".format(", ".join(items[:-1]), items[-1])


class ParseError(Exception):
    """
    Exception that is raised if a parser was unable to parse the input.

    :param errors: Merged errors at the furthest location
    :param loc_str: String representation of the location
    """

    def __init__(self, errors: Errors, loc_str: str):
        super().__init__(errors, loc_str)
        self.errors = errors
        self.loc_str = loc_str

    @property
    def loc(self) -> Loc:
        return self.errors.loc

    @property
    def expected(self) -> List[str]:
        return self.errors.expected

    @property
    def unexpected(self) -> List[str]:
        return self.errors.unexpected

    @property
    def msg(self) -> str:
        """
        Human-readable description of the error.
        """

        parts = []
        if self.errors.unexpected:
            parts.append("unexpected " + _fmt_list(self.errors.unexpected))
        if self.errors.expected:
            parts.append("expected " + _fmt_list(self.errors.expected))
        parts.extend(self.errors.messages)
        parts.extend(str(cause) for cause in self.errors.causes)
        if not parts:
            parts.append("unexpected input")
        return "at {}: {}".format(self.loc_str, ", ".join(parts))

    def __str__(self) -> str:
        return self.msg


class ParseResult(Generic[V_co]):
    """
    Result of the parsing: either a value and the location where parsing
    stopped, or the merged errors.
    """

    def __init__(
            self, result: Union[Ok[V_co], Error], loc: Loc,
            fmt_loc: Callable[[Loc], str]):
        self._result = result
        self._loc = loc
        self._fmt_loc = fmt_loc

    def __repr__(self) -> str:
        if type(self._result) is Ok:
            return "ParseResult(value={!r}, loc={!r})".format(
                self._result.value, self._loc
            )
        return "ParseResult(errors={!r})".format(self._result.errors)

    @property
    def ok(self) -> bool:
        return type(self._result) is Ok

    @property
    def loc(self) -> Loc:
        """
        Location of the remaining input on success, location of the error
        otherwise.
        """

        if type(self._result) is Ok:
            return self._loc
        return self._result.errors.loc

    @property
    def errors(self) -> Optional[Errors]:
        if type(self._result) is Error:
            return self._result.errors
        return None

    def fmap(self, fn: Callable[[V_co], U]) -> "ParseResult[U]":
        """
        Transforms :class:`ParseResult`\\[``V_co``] into
        :class:`ParseResult`\\[``U``] by applying `fn` to value.

        :param fn: Function to apply to value
        """

        return ParseResult(self._result.fmap(fn), self._loc, self._fmt_loc)

    def unwrap(self) -> V_co:
        """
        Returns parsed value if there is one. Otherwise throws
        :exc:`ParseError`.

        :raise: :exc:`ParseError`
        """

        if type(self._result) is Ok:
            return self._result.value
        errors = self._result.errors
        raise ParseError(errors, self._fmt_loc(errors.loc))
