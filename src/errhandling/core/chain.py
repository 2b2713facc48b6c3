"""Immutable error chains.

A chain is a linked list of :class:`ChainedError` nodes. Every node adds one
message on top of the node (or foreign error) that caused it, and remembers
the root cause of the whole chain. Nodes never change after construction;
wrapping an error always allocates a new node pointing at the previous one.

Example:
    ```python
    from errhandling import construct

    root = construct("connection refused")
    err = construct("could not load user profile", root)

    str(err)
    # 'connection refused -> could not load user profile'

    print(err.full_report())
    # error:
    #     could not load user profile
    #
    # Root cause:
    #     connection refused
    #
    # Full error trace:
    #     could not load user profile
    #     caused by: connection refused
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Protocol, Union, runtime_checkable

_REPORT_TEMPLATE = (
    "error:\n\t{message}\n\nRoot cause:\n\t{root_message}\n\nFull error trace:\n{trace}"
)
_TOP_LINE = "\t{}"
_CAUSE_LINE = "\tcaused by: {}"


@runtime_checkable
class PrintableError(Protocol):
    """Anything able to render a full multi-line error report."""

    def full_report(self) -> str: ...


@dataclass(frozen=True)
class ForeignError:
    """Opaque error produced outside the chain model.

    Only the display string of the wrapped value is ever consulted. A foreign
    error is always a leaf: whatever cause it may carry internally (for
    instance ``__cause__`` on an exception) is not followed.

    Attributes:
        error: The wrapped value, usually an exception instance.
    """

    error: Any

    @classmethod
    def wrap(cls, error: Any) -> "ForeignError":
        if isinstance(error, ForeignError):
            return error
        return cls(error)

    def display(self) -> str:
        """Return the display string of the wrapped error."""
        return str(self.error)

    @property
    def message(self) -> str:
        return self.display()

    def __str__(self) -> str:
        return self.display()


Cause = Union["ChainedError", ForeignError]


@dataclass(frozen=True, eq=False)
class ChainedError:
    """One link of an error chain.

    Attributes:
        message: Decoration added at this level.
        cause: Node or foreign error this error was caused by; None for a root.
        root: Originating node of the chain, or the foreign leaf when the chain
            ends on an error from outside the model. Fixed at construction.
    """

    message: str
    cause: Optional[Cause] = None
    root: Union["ChainedError", ForeignError] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        cause = self.cause
        if cause is None:
            root: Union[ChainedError, ForeignError] = self
        elif isinstance(cause, ChainedError):
            root = cause.root
        else:
            cause = ForeignError.wrap(cause)
            object.__setattr__(self, "cause", cause)
            root = cause
        object.__setattr__(self, "root", root)

    @classmethod
    def from_error(cls, error: Any) -> "ChainedError":
        """Promote any error to a chain without adding a level.

        A ChainedError is returned unchanged; anything else becomes a root
        node carrying its display string.
        """
        if isinstance(error, ChainedError):
            return error
        return cls(ForeignError.wrap(error).display())

    @property
    def is_root(self) -> bool:
        return self.cause is None

    @property
    def root_message(self) -> str:
        """Display text of the root cause."""
        return self.root.message

    def causes(self) -> Iterator[Union["ChainedError", ForeignError]]:
        """Iterate from this node down to the root, inclusive."""
        current: Optional[Cause] = self
        while current is not None:
            yield current
            if isinstance(current, ForeignError):
                return
            current = current.cause

    def short_form(self) -> str:
        """Return the one-line form, root cause first: ``a -> b -> c``."""
        messages = [link.message for link in self.causes()]
        return " -> ".join(reversed(messages))

    def trace_lines(self, is_nested_cause: bool = False) -> str:
        """Render the trace section of the full report.

        Args:
            is_nested_cause: Render this node as a cause of another node,
                i.e. with a ``caused by:`` prefix.

        Returns:
            One tab-indented line per link, newest first.
        """
        lines: List[str] = []
        for depth, link in enumerate(self.causes()):
            if depth == 0 and not is_nested_cause:
                lines.append(_TOP_LINE.format(link.message))
            else:
                lines.append(_CAUSE_LINE.format(link.message))
        return "\n".join(lines)

    def full_report(self) -> str:
        """Return the multi-line report with the root cause and full trace."""
        return _REPORT_TEMPLATE.format(
            message=self.message,
            root_message=self.root_message,
            trace=self.trace_lines(False),
        )

    def __str__(self) -> str:
        return self.short_form()


def construct(message: str, cause: Any = None) -> ChainedError:
    """Build a chain node.

    Args:
        message: Message for the new node.
        cause: Optional cause. Anything that is not a ChainedError is treated
            as a foreign leaf.

    Returns:
        The new node. With a ChainedError cause the root is inherited from it.
    """
    return ChainedError(message, cause)


__all__ = [
    "ChainedError",
    "ForeignError",
    "PrintableError",
    "construct",
]
