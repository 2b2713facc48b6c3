"""Decoration of ``(value, error)`` pairs with an extra message."""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple, TypeVar

from errhandling.core.chain import ChainedError

T = TypeVar("T")


def decorate(value: T, err: Any, message: str) -> Tuple[T, Optional[ChainedError]]:
    """Wrap ``err`` in a new chain node carrying ``message``.

    Args:
        value: Value returned alongside the error; passed through untouched.
        err: The error to decorate, or None.
        message: Message of the new top node.

    Returns:
        ``(value, None)`` when there is no error. Otherwise ``value`` and a
        node whose cause is ``err``. A foreign error first becomes a root node
        of its own, so the result is always two levels deep in that case.
    """
    if err is None:
        return value, None
    return value, ChainedError(message, ChainedError.from_error(err))


def with_cause(value: T, err: Any) -> Callable[[str], Tuple[T, Optional[ChainedError]]]:
    """Curried form of :func:`decorate`.

    Example:
        ```python
        user, err = with_cause(*fetch_user(user_id))("could not fetch user")
        ```
    """

    def _describe(message: str) -> Tuple[T, Optional[ChainedError]]:
        return decorate(value, err, message)

    return _describe


__all__ = ["decorate", "with_cause"]
