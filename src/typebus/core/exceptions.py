"""Custom exceptions for typebus."""

from __future__ import annotations

from typing import Any


class TypeBusError(Exception):
    """Base exception for all typebus errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(TypeBusError):
    """Raised when there's a configuration problem."""

    pass


class DispatchError(TypeBusError):
    """Raised when a listener fails while an event is being dispatched.

    Accepts either ``DispatchError(cause)`` or ``DispatchError(message, cause)``.
    Listeners may raise it themselves to report a failure with their own
    message; the bus propagates it unchanged.
    """

    def __init__(
        self,
        message: str | BaseException | None = None,
        cause: BaseException | None = None,
        *,
        listener: Any = None,
        event: Any = None,
    ) -> None:
        if isinstance(message, BaseException):
            message, cause = None, message
        if message is None:
            message = str(cause) if cause is not None else "Event dispatch failed"
        details: dict[str, Any] = {}
        if event is not None:
            details["event_type"] = type(event).__qualname__
        if cause is not None:
            details["cause"] = type(cause).__qualname__
        super().__init__(message, details)
        self.cause = cause
        self.listener = listener
        self.event = event


class ListenerTypeError(TypeBusError):
    """Raised when a listener's declared event type cannot be resolved."""

    pass
