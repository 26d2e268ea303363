"""Cancellation signal and error helpers."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


class _Cancel:
    """Sentinel returned by a prompt that ended in the cancel state."""

    _instance: _Cancel | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCEL"

    def __bool__(self) -> bool:
        return False


CANCEL = _Cancel()


class SelectionCancelled(RuntimeError):
    """Raised by the convenience entry points when the user cancels."""

    def __init__(self, message: str = "Selection cancelled"):
        super().__init__(message)


class CatalogError(ValueError):
    """Raised when a catalog file or structure is invalid."""


def is_cancel(value: object) -> bool:
    """Check if a prompt result is the cancellation sentinel."""
    return value is CANCEL


def handle_cancellation(value: T | _Cancel) -> T | None:
    """Return the value, or None if the prompt was cancelled."""
    if is_cancel(value):
        return None
    return value


def get_error_message(error: object) -> str:
    """Extract a readable message from any raised object."""
    if isinstance(error, BaseException):
        return str(error) or error.__class__.__name__
    return str(error)
