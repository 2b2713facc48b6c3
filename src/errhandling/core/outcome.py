"""Explicit result values for composing fallible steps.

An :class:`Outcome` is either a :class:`Success` holding a value or a
:class:`Failure` holding a :class:`~errhandling.core.chain.ChainedError`.
Steps are chained with :meth:`Outcome.and_then` / :meth:`Outcome.map`; the
first failure short-circuits the rest of the chain. :meth:`Outcome.unwrap`
hands a failure over to the nearest boundary instead.

Example:
    ```python
    outcome = (
        Outcome.from_pair(*read_file(path))
        .with_cause("could not read settings")
        .and_then(parse_settings)
        .map(Settings.model_validate)
    )
    settings, err = outcome.to_pair()
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from errhandling.core.chain import ChainedError
from errhandling.core.propagation import propagate_error

T = TypeVar("T")
U = TypeVar("U")


class Outcome(ABC, Generic[T]):
    """Base of Success and Failure."""

    @property
    @abstractmethod
    def is_success(self) -> bool: ...

    @abstractmethod
    def unwrap(self) -> T:
        """Return the value, or propagate the failure to the nearest boundary."""

    @abstractmethod
    def unwrap_or(self, default: T) -> T: ...

    @abstractmethod
    def map(self, fn: Callable[[T], U]) -> "Outcome[U]": ...

    @abstractmethod
    def and_then(self, fn: Callable[[T], "Outcome[U]"]) -> "Outcome[U]": ...

    @abstractmethod
    def with_cause(self, message: str) -> "Outcome[T]":
        """Decorate a failure with ``message``; successes pass through."""

    @abstractmethod
    def to_pair(self) -> Tuple[Optional[T], Optional[ChainedError]]: ...

    @staticmethod
    def from_pair(value: T, err: Any) -> "Outcome[T]":
        """Build an outcome from a ``(value, error)`` pair."""
        if err is None:
            return Success(value)
        return Failure(ChainedError.from_error(err))

    @staticmethod
    def capture(fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Outcome[T]":
        """Call ``fn`` and turn a raised exception into a Failure.

        Only ``Exception`` subclasses are captured; propagation signals and
        terminations keep unwinding.
        """
        try:
            return Success(fn(*args, **kwargs))
        except Exception as e:
            return Failure(ChainedError.from_error(e))


@dataclass(frozen=True)
class Success(Outcome[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Outcome[U]:
        return Success(fn(self.value))

    def and_then(self, fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
        return fn(self.value)

    def with_cause(self, message: str) -> Outcome[T]:
        return self

    def to_pair(self) -> Tuple[Optional[T], Optional[ChainedError]]:
        return self.value, None


@dataclass(frozen=True)
class Failure(Outcome[T]):
    error: ChainedError

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> T:
        propagate_error(self.error)

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, fn: Callable[[T], U]) -> Outcome[U]:
        return Failure(self.error)

    def and_then(self, fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
        return Failure(self.error)

    def with_cause(self, message: str) -> Outcome[T]:
        return Failure(ChainedError(message, self.error))

    def to_pair(self) -> Tuple[Optional[T], Optional[ChainedError]]:
        return None, self.error


__all__ = ["Outcome", "Success", "Failure"]
