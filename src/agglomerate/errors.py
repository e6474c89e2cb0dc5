"""
Exception types raised by the clustering engine and its collaborators.

Every failure aborts the run in progress; none of these are retried.
"""

__all__ = [
    "AgglomerateError",
    "AllocationError",
    "InvalidNodeError",
    "NoMergeCandidateError",
    "InputError",
]


class AgglomerateError(Exception):
    """Base class for all errors raised by this package."""


class AllocationError(AgglomerateError, MemoryError):
    """Backing storage for the distance matrix or node arena could not be obtained."""


class InvalidNodeError(AgglomerateError, RuntimeError):
    """The node arena is inconsistent (an Unused slot was reached)."""


class NoMergeCandidateError(AgglomerateError, RuntimeError):
    """No live merge candidate exists while more than one cluster remains."""


class InputError(AgglomerateError, ValueError):
    """Malformed input records or configuration values."""

    def __init__(self, message: str, line: int = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
