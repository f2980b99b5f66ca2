"""typebus: in-process event dispatch resolved along the type hierarchy."""

from typebus.core.exceptions import (
    ConfigurationError,
    DispatchError,
    ListenerTypeError,
    TypeBusError,
)
from typebus.domain.binding import Binding
from typebus.domain.listener import FunctionListener, Listener
from typebus.domain.ports import EventListener, TypeOracle
from typebus.domain.types import HierarchyTable, NativeTypeOracle
from typebus.infrastructure.events.bus import EventBus

__version__ = "0.1.0"

__all__ = [
    "EventBus",
    "Listener",
    "FunctionListener",
    "EventListener",
    "Binding",
    "TypeOracle",
    "NativeTypeOracle",
    "HierarchyTable",
    "TypeBusError",
    "DispatchError",
    "ConfigurationError",
    "ListenerTypeError",
]
