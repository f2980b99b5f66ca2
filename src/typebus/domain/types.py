"""Type-relationship oracles.

:class:`NativeTypeOracle` defers to Python's own class hierarchy, including
ABC registration and runtime-checkable protocols.  :class:`HierarchyTable`
is an explicit supertype table for applications whose event types do not
carry the relationship in their class hierarchy.
"""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterable, Mapping


class NativeTypeOracle:
    """Assignability through :func:`issubclass`."""

    def is_assignable(self, declared: type, concrete: type) -> bool:
        try:
            return issubclass(concrete, declared)
        except TypeError:
            # Protocols that are not runtime-checkable cannot answer issubclass().
            return False

    def __repr__(self) -> str:
        return "NativeTypeOracle()"


class HierarchyTable:
    """Explicit subtype -> supertypes table.

    Assignability is reflexive and transitive over the declared edges, and
    ``object`` is assignable from every type.  Declare the hierarchy before
    dispatching: a bus caches resolutions per concrete type.

    Example::

        table = HierarchyTable({OrderPlaced: [OrderEvent], OrderEvent: [DomainEvent]})
        table.is_assignable(DomainEvent, OrderPlaced)  # True
    """

    def __init__(self, edges: Mapping[type, Iterable[type]] | None = None) -> None:
        self._parents: dict[type, set[type]] = defaultdict(set)
        for subtype, supertypes in (edges or {}).items():
            self.declare(subtype, *supertypes)

    def declare(self, subtype: type, *supertypes: type) -> None:
        """Record that *subtype* is assignable to each of *supertypes*."""
        self._parents[subtype].update(supertypes)

    def supertypes_of(self, concrete: type) -> set[type]:
        """Return *concrete*, every transitive supertype, and ``object``."""
        seen = {concrete, object}
        queue = deque([concrete])
        while queue:
            current = queue.popleft()
            for parent in self._parents.get(current, ()):
                if parent not in seen:
                    seen.add(parent)
                    queue.append(parent)
        return seen

    def is_assignable(self, declared: type, concrete: type) -> bool:
        return declared in self.supertypes_of(concrete)

    def __len__(self) -> int:
        return len(self._parents)
