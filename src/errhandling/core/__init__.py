"""Core error chaining and propagation primitives."""

from errhandling.core.chain import ChainedError, ForeignError, PrintableError, construct
from errhandling.core.combinators import must, on_error, on_success
from errhandling.core.decorate import decorate, with_cause
from errhandling.core.exceptions import (
    ConfigurationError,
    ErrhandlingError,
    UnrecognizedSignalError,
)
from errhandling.core.outcome import Failure, Outcome, Success
from errhandling.core.propagation import (
    Boundary,
    BoundaryState,
    ErrorOnly,
    PropagationSignal,
    Slot,
    ValueErrorPair,
    boundary,
    ensure_no_error,
    propagate,
    propagate_error,
)
from errhandling.core.termination import Unrecoverable, terminate

__all__ = [
    "Boundary",
    "BoundaryState",
    "ChainedError",
    "ConfigurationError",
    "ErrhandlingError",
    "ErrorOnly",
    "Failure",
    "ForeignError",
    "Outcome",
    "PrintableError",
    "PropagationSignal",
    "Slot",
    "Success",
    "UnrecognizedSignalError",
    "Unrecoverable",
    "ValueErrorPair",
    "boundary",
    "construct",
    "decorate",
    "ensure_no_error",
    "must",
    "on_error",
    "on_success",
    "propagate",
    "propagate_error",
    "terminate",
    "with_cause",
]
