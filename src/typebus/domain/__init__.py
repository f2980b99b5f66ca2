"""Domain model: listeners, bindings and type oracles."""

from typebus.domain.binding import Binding
from typebus.domain.listener import FunctionListener, Listener, as_class, resolve_event_type
from typebus.domain.ports import EventListener, TypeOracle
from typebus.domain.types import HierarchyTable, NativeTypeOracle

__all__ = [
    "Binding",
    "EventListener",
    "FunctionListener",
    "HierarchyTable",
    "Listener",
    "NativeTypeOracle",
    "TypeOracle",
    "as_class",
    "resolve_event_type",
]
