"""Port definitions.

The bus depends only on these Protocols: anything with a ``handle_event``
method can be registered, and any object answering ``is_assignable`` can
decide which declared types a concrete event type satisfies.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

E_contra = TypeVar("E_contra", contravariant=True)


@runtime_checkable
class EventListener(Protocol[E_contra]):
    """Something that handles events of one declared type."""

    def handle_event(self, event: E_contra) -> None: ...


@runtime_checkable
class TypeOracle(Protocol):
    """Answers "may an instance of *concrete* be treated as *declared*?"."""

    def is_assignable(self, declared: type, concrete: type) -> bool: ...
