class ErrhandlingError(Exception):
    """Base class for all custom exceptions in the errhandling library."""

    pass


class ConfigurationError(ErrhandlingError):
    """Raised when the API is misused (e.g. a boundary without an error output).

    This is a programmer error: it is never transported by a propagation
    signal and never recovered by a boundary.
    """

    pass


class UnrecognizedSignalError(ErrhandlingError):
    """Raised when a propagation signal carries a payload of unknown shape."""

    def __init__(self, payload: object) -> None:
        self.payload = payload
        super().__init__(
            f"Unrecognized propagation payload of type {type(payload).__name__}"
        )


__all__ = [
    "ErrhandlingError",
    "ConfigurationError",
    "UnrecognizedSignalError",
]
