"""Small helpers over ``(value, error)`` pairs."""

from __future__ import annotations

from typing import Any, Callable, Tuple, TypeVar

from errhandling.core.termination import terminate

T = TypeVar("T")
E = TypeVar("E")


def must(value: T, err: Any) -> T:
    """Return ``value``, or terminate the unit of work if ``err`` is set.

    Meant for setup steps whose failure makes continuing meaningless. The
    termination cannot be intercepted by a boundary.
    """
    if err is not None:
        terminate(err, "Unrecoverable error")
    return value


def on_error(value: T, err: E, side_effect: Callable[[E], Any]) -> Tuple[T, E]:
    """Call ``side_effect(err)`` when ``err`` is set; return the pair unchanged."""
    if err is not None:
        side_effect(err)
    return value, err


def on_success(value: T, err: E, side_effect: Callable[[T], Any]) -> Tuple[T, E]:
    """Call ``side_effect(value)`` when ``err`` is None; return the pair unchanged."""
    if err is None:
        side_effect(value)
    return value, err


__all__ = ["must", "on_error", "on_success"]
