"""Registered (listener, scope) bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=False)
class Binding:
    """A listener bound to its declared event type and optional scope marker.

    Equality is by identity: two bindings are equal when they hold the same
    listener object and the same scope object.  ``priority`` orders dispatch
    within a resolved type; lower values fire first.
    """

    listener: Any
    event_type: type
    scope: Any = None
    priority: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Binding):
            return NotImplemented
        return self.listener is other.listener and self.scope is other.scope

    def __hash__(self) -> int:
        return id(self.listener)

    def matches(self, listener: Any, scope: Any = None) -> bool:
        return self.listener is listener and self.scope is scope

    def accepts(self, scope: Any) -> bool:
        """Scope filter: unset on either side, or the very same object."""
        return self.scope is None or scope is None or self.scope is scope

    def invoke(self, event: Any) -> None:
        self.listener.handle_event(event)
