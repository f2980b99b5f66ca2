"""In-memory event bus.

Publish/dispatch for events matched by runtime type.  A listener registered
for a declared type receives every event whose concrete type is assignable
to it, so a listener for a base class also sees its subclasses.  Listeners
are called synchronously; the first failure aborts the dispatch.

Resolutions are cached per concrete event type.  The cache is built lazily
on first dispatch and kept in step with later registrations and removals.
Within a type, listeners fire by priority: ``register`` appends after the
existing listeners, ``register_before`` puts the new one ahead of them.
"""

from __future__ import annotations

import itertools
import threading
from contextlib import AbstractContextManager, nullcontext
from operator import attrgetter
from typing import Any

from typebus.config.logging import get_logger
from typebus.config.settings import get_settings
from typebus.core.exceptions import DispatchError
from typebus.domain.binding import Binding
from typebus.domain.listener import resolve_event_type
from typebus.domain.ports import TypeOracle
from typebus.domain.types import NativeTypeOracle

logger = get_logger(__name__)


class EventBus:
    """Synchronous in-memory event bus with a per-type resolution cache.

    Args:
        oracle: Decides whether a concrete event type satisfies a declared
            type.  Defaults to :class:`NativeTypeOracle` (``issubclass``).
        thread_safe: Guard the ledger and cache with a re-entrant lock.
            Defaults to the ``TYPEBUS_THREAD_SAFE`` setting.

    Raises:
        ConfigurationError: *thread_safe* was omitted and the settings are
            invalid.
    """

    def __init__(
        self,
        oracle: TypeOracle | None = None,
        *,
        thread_safe: bool | None = None,
    ) -> None:
        if thread_safe is None:
            thread_safe = get_settings().thread_safe
        self._oracle: TypeOracle = oracle or NativeTypeOracle()
        self._listeners: list[Binding] = []
        self._cached_listeners: dict[type, list[Binding]] = {}
        self._sequence = itertools.count(1)
        self._lock: AbstractContextManager[Any] = threading.RLock() if thread_safe else nullcontext()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, listener: Any, scope: Any = None) -> Binding:
        """Register *listener*, after those already registered for its types.

        If *scope* is given, the listener only fires for dispatches made with
        that same scope object, or with no scope at all.

        Raises:
            ListenerTypeError: The listener names an event type in its
                ``handle_event`` annotation that cannot be resolved.
        """
        return self._add(listener, scope, before=False)

    def register_before(self, listener: Any, scope: Any = None) -> Binding:
        """Register *listener* ahead of those already registered for its types."""
        return self._add(listener, scope, before=True)

    def remove_listener(self, listener: Any, scope: Any = None) -> None:
        """Remove the binding of *listener* with *scope*.  Unknown bindings are ignored."""
        with self._lock:
            binding = next((b for b in self._listeners if b.matches(listener, scope)), None)
            if binding is None:
                return
            _discard(self._listeners, binding)
            for resolved in self._cached_listeners.values():
                _discard(resolved, binding)

        logger.debug(
            "bus.removed",
            listener=_describe(listener),
            event_type=binding.event_type.__qualname__,
        )

    def clear(self) -> None:
        """Drop every binding and cached resolution."""
        with self._lock:
            self._listeners.clear()
            self._cached_listeners.clear()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, event: Any, scope: Any = None) -> None:
        """Deliver *event* to every listener whose declared type it satisfies.

        Args:
            event: The event; its concrete type is ``type(event)``.
            scope: Only bindings without a scope, or with this exact scope
                object, are invoked.  ``None`` invokes all of them.

        Raises:
            DispatchError: The first listener that failed.  Remaining
                listeners are not invoked.
        """
        for binding in self._resolve(type(event)):
            if not binding.accepts(scope):
                continue
            try:
                binding.invoke(event)
            except Exception as e:
                logger.warning(
                    "bus.listener_failed",
                    listener=_describe(binding.listener),
                    event_type=type(event).__qualname__,
                    error=str(e),
                )
                if isinstance(e, DispatchError):
                    raise
                raise DispatchError(e, listener=binding.listener, event=event) from e

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def listeners_for(self, event_type: type) -> list[Any]:
        """Return the listeners a dispatch of *event_type* would consider, in order."""
        return [binding.listener for binding in self._resolve(event_type)]

    def cached_types(self) -> set[type]:
        """Return the concrete event types resolved so far."""
        with self._lock:
            return set(self._cached_listeners)

    @property
    def bindings(self) -> tuple[Binding, ...]:
        """All bindings in registration order."""
        with self._lock:
            return tuple(self._listeners)

    @property
    def oracle(self) -> TypeOracle:
        return self._oracle

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        with self._lock:
            return any(binding.listener is listener for binding in self._listeners)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add(self, listener: Any, scope: Any, *, before: bool) -> Binding:
        event_type = resolve_event_type(listener)
        with self._lock:
            sequence = next(self._sequence)
            binding = Binding(
                listener=listener,
                event_type=event_type,
                scope=scope,
                priority=-sequence if before else sequence,
            )
            self._listeners.append(binding)
            for concrete, resolved in self._cached_listeners.items():
                if not self._oracle.is_assignable(event_type, concrete):
                    continue
                if before:
                    resolved.insert(0, binding)
                else:
                    resolved.append(binding)

        logger.debug(
            "bus.registered",
            listener=_describe(listener),
            event_type=event_type.__qualname__,
            before=before,
            scoped=scope is not None,
        )
        return binding

    def _resolve(self, concrete: type) -> tuple[Binding, ...]:
        """Return a snapshot of the bindings for *concrete*, building it if needed."""
        with self._lock:
            resolved = self._cached_listeners.get(concrete)
            if resolved is None:
                # Priority order is what incremental updates would have produced.
                resolved = sorted(
                    (b for b in self._listeners if self._oracle.is_assignable(b.event_type, concrete)),
                    key=attrgetter("priority"),
                )
                self._cached_listeners[concrete] = resolved
                logger.debug(
                    "bus.cache_built",
                    event_type=concrete.__qualname__,
                    listener_count=len(resolved),
                )
            return tuple(resolved)


def _discard(bindings: list[Binding], binding: Binding) -> None:
    for index, candidate in enumerate(bindings):
        if candidate is binding:
            del bindings[index]
            return


def _describe(listener: Any) -> str:
    return type(listener).__qualname__
