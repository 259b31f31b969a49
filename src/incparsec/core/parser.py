from abc import abstractmethod
from typing import Any, Callable, Generic, TypeVar

from .cursor import Cursor
from .result import Result

S_contra = TypeVar("S_contra", contravariant=True)
A_co = TypeVar("A_co", covariant=True)

# The second argument is ``None`` on a fresh call, or the state of an
# Incomplete result when a suspended call is resumed.
ParseFn = Callable[[Cursor[S_contra], Any], Result[A_co]]


class ParseObj(Generic[S_contra, A_co]):
    @abstractmethod
    def parse_fn(
            self, cursor: Cursor[S_contra], state: Any) -> Result[A_co]:
        ...

    def to_fn(self) -> ParseFn[S_contra, A_co]:
        return self.parse_fn
