"""Non-local propagation of failures to a recovery point.

A call site that cannot continue raises a :class:`PropagationSignal` with
:func:`propagate` (value and error) or :func:`propagate_error` (error only).
The signal unwinds the call stack up to the innermost active
:class:`Boundary`, which writes the payload into its output slots and lets
the function that established it carry on as if nothing had been raised.

Example:
    ```python
    from errhandling import Boundary, Slot, ensure_no_error

    def load_settings(path):
        err = Slot()
        with Boundary(err):
            raw = ensure_no_error(*read_file(path), "could not read settings")
            return ensure_no_error(*parse(raw), "could not parse settings"), None
        return None, err.value
    ```

The same thing with the decorator form:

    ```python
    @boundary
    def load_settings(path):
        raw = ensure_no_error(*read_file(path), "could not read settings")
        return ensure_no_error(*parse(raw), "could not parse settings"), None
    ```

Signals derive from ``BaseException`` so that ``except Exception`` blocks
between the raise site and the boundary do not swallow them. Active
boundaries are tracked in a context variable, so a boundary only ever
intercepts signals raised in its own thread or task.
"""

from __future__ import annotations

import contextvars
import functools
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from types import FrameType, TracebackType
from typing import Any, Callable, Generic, NoReturn, Optional, Tuple, Type, TypeVar, Union

from errhandling.core.chain import ChainedError
from errhandling.core.decorate import decorate
from errhandling.core.exceptions import ConfigurationError, UnrecognizedSignalError
from errhandling.core.termination import terminate

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ACTIVE_BOUNDARIES: contextvars.ContextVar[Tuple["Boundary", ...]] = (
    contextvars.ContextVar("active_boundaries", default=())
)


@dataclass(frozen=True)
class ValueErrorPair:
    """Signal payload carrying a value along with the error."""

    value: Any
    error: Any


@dataclass(frozen=True)
class ErrorOnly:
    """Signal payload carrying only the error."""

    error: Any


Payload = Union[ValueErrorPair, ErrorOnly]


class PropagationSignal(BaseException):
    """Transports a payload from a raise site to the nearest boundary.

    Attributes:
        payload: A ValueErrorPair or an ErrorOnly.
    """

    def __init__(self, payload: Any) -> None:
        self.payload = payload
        super().__init__(payload)


class BoundaryState(Enum):
    """Lifecycle of a Boundary."""

    ARMED = "armed"
    TRIPPED = "tripped"
    EXITED = "exited"


class Slot(Generic[T]):
    """Output location written by a Boundary when it intercepts a signal."""

    def __init__(self) -> None:
        self._value: Optional[T] = None
        self._is_set = False

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def is_set(self) -> bool:
        return self._is_set

    def set(self, value: T) -> None:
        self._value = value
        self._is_set = True

    def __repr__(self) -> str:
        return f"Slot({self._value!r})" if self._is_set else "Slot(<unset>)"


def active_boundary_count() -> int:
    """Number of boundaries active in the current execution context."""
    return len(_ACTIVE_BOUNDARIES.get())


class Boundary:
    """Scoped recovery point for propagation signals.

    Used as a context manager around the code that may propagate. When that
    code completes normally the output slots are left untouched. When a
    signal reaches the boundary its payload is copied into the slots, the
    signal is suppressed and execution resumes after the ``with`` block.

    A boundary is single use and not reentrant.

    Args:
        error_out: Slot receiving the error. Mandatory.
        value_out: Optional slot receiving the value of a ValueErrorPair.

    Raises:
        ConfigurationError: If ``error_out`` is None.
    """

    def __init__(self, error_out: Optional[Slot], value_out: Optional[Slot] = None) -> None:
        if error_out is None:
            raise ConfigurationError("Boundary requires an error output slot")
        self._error_out = error_out
        self._value_out = value_out
        self._state = BoundaryState.ARMED
        self._tripped = False
        self._entered = False
        self._token: Optional[contextvars.Token] = None
        self._frame: Optional[FrameType] = None

    @property
    def state(self) -> BoundaryState:
        return self._state

    @property
    def tripped(self) -> bool:
        """Whether a signal was intercepted during the governed scope."""
        return self._tripped

    def __enter__(self) -> "Boundary":
        if self._entered:
            raise ConfigurationError("Boundary instances are single-use and not reentrant")
        self._entered = True
        frame = sys._getframe(1)
        # Skip overriding __enter__ methods and contextlib.ExitStack.
        while frame is not None and (
            frame.f_locals.get("self") is self
            or frame.f_globals.get("__name__") == "contextlib"
        ):
            frame = frame.f_back
        self._frame = frame
        self._token = _ACTIVE_BOUNDARIES.set(_ACTIVE_BOUNDARIES.get() + (self,))
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> bool:
        if self._token is not None:
            _ACTIVE_BOUNDARIES.reset(self._token)
            self._token = None
        self._frame = None

        if not isinstance(exc_value, PropagationSignal):
            self._state = BoundaryState.EXITED
            return False

        payload = exc_value.payload
        if isinstance(payload, ValueErrorPair):
            if self._value_out is not None:
                self._value_out.set(payload.value)
            self._error_out.set(payload.error)
        elif isinstance(payload, ErrorOnly):
            self._error_out.set(payload.error)
        else:
            self._state = BoundaryState.EXITED
            if _enclosing_boundary_active():
                logger.debug("Forwarding unrecognized signal payload %r", payload)
                return False
            terminate(UnrecognizedSignalError(payload), "Unrecognized propagation signal")

        self._state = BoundaryState.TRIPPED
        self._tripped = True
        logger.debug("Boundary intercepted propagation signal: %s", payload.error)
        self._state = BoundaryState.EXITED
        return True


def _enclosing_boundary_active() -> bool:
    """Whether an active boundary's ``with`` block is on the running stack.

    A boundary registered by a generator that is suspended at a ``yield``
    stays in the context variable but does not enclose the caller.
    """
    entry_frames = {
        id(b._frame) for b in _ACTIVE_BOUNDARIES.get() if b._frame is not None
    }
    if not entry_frames:
        return False
    frame: Optional[FrameType] = sys._getframe(1)
    while frame is not None:
        if id(frame) in entry_frames:
            return True
        frame = frame.f_back
    return False


def _raise_signal(payload: Payload) -> NoReturn:
    if not _enclosing_boundary_active():
        terminate(payload.error, "Propagation signal raised outside of any boundary")
    raise PropagationSignal(payload)


def _checked(err: Any) -> Any:
    if err is None:
        raise ConfigurationError("Cannot propagate an empty error")
    return err


def propagate(value: Any, err: Any) -> NoReturn:
    """Abort to the nearest boundary with a ``(value, err)`` payload.

    ``err`` reaches the boundary as given, foreign errors included.

    Raises:
        ConfigurationError: If ``err`` is None.
    """
    _raise_signal(ValueErrorPair(value, _checked(err)))


def propagate_error(err: Any) -> NoReturn:
    """Abort to the nearest boundary with an error-only payload.

    Raises:
        ConfigurationError: If ``err`` is None.
    """
    _raise_signal(ErrorOnly(_checked(err)))


def ensure_no_error(value: T, err: Any, message: str = "") -> T:
    """Return ``value`` or propagate ``err`` to the nearest boundary.

    Args:
        value: Value of the ``(value, err)`` pair.
        err: Error of the pair, or None.
        message: Decoration added on top of ``err``. An empty message still
            adds a level.

    Returns:
        ``value`` when ``err`` is None.
    """
    if err is None:
        return value
    _, error = decorate(value, err, message)
    propagate(value, error)


def boundary(
    func: Optional[Callable[..., Any]] = None, *, with_value: bool = True
) -> Any:
    """Run a function inside its own Boundary.

    When the function completes normally its return value is passed through.
    When a signal is intercepted the function returns ``(value, error)``
    instead, or just ``error`` with ``with_value=False``.

    Usable both as ``@boundary`` and ``@boundary(with_value=False)``.
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            error_out: Slot[ChainedError] = Slot()
            value_out: Optional[Slot[Any]] = Slot() if with_value else None
            with Boundary(error_out, value_out):
                return fn(*args, **kwargs)
            if value_out is not None:
                return value_out.value, error_out.value
            return error_out.value

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


__all__ = [
    "Boundary",
    "BoundaryState",
    "ErrorOnly",
    "Payload",
    "PropagationSignal",
    "Slot",
    "ValueErrorPair",
    "active_boundary_count",
    "boundary",
    "ensure_no_error",
    "propagate",
    "propagate_error",
]
