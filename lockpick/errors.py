"""Error types raised when an internal check fails, and helpers that raise them."""

from __future__ import annotations

from typing import NoReturn

__all__ = [
    "LockpickError",
    "ConsistencyError",
    "UnrecoverableError",
    "affirm",
    "fail",
]


class LockpickError(Exception):
    """Base class for every error the package raises on its own."""

    summary = "Lockpick error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message or self.summary


class ConsistencyError(LockpickError):
    """A control-flow consistency check did not hold."""

    summary = "Control flow consistency check failed"


class UnrecoverableError(LockpickError):
    """An operation reached a state it cannot recover from."""

    summary = "Unrecoverable error"


def affirm(condition: object, message: str) -> None:
    """Raise ConsistencyError with ``message`` unless ``condition`` is true."""
    if not condition:
        raise ConsistencyError(message)


def fail(message: str) -> NoReturn:
    """Raise UnrecoverableError with ``message``."""
    raise UnrecoverableError(message)