"""Success/failure union returned by every request operation."""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from discord_rest.core.errors import RequestError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful result carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value


@dataclass(frozen=True)
class Failure:
    """A failed result carrying one of the request error kinds."""

    error: RequestError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error


Result = Success[T] | Failure
