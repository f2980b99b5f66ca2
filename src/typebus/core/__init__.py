"""Core errors for typebus."""

from typebus.core.exceptions import (
    ConfigurationError,
    DispatchError,
    ListenerTypeError,
    TypeBusError,
)

__all__ = [
    "TypeBusError",
    "ConfigurationError",
    "DispatchError",
    "ListenerTypeError",
]
