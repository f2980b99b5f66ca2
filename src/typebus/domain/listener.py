"""Listener base class and declared-type resolution.

A listener declares the one event type it handles.  The declaration is
read once, at registration, by :func:`resolve_event_type`:

1. an explicit ``event_type`` attribute;
2. the type argument of ``Listener[T]`` (or ``EventListener[T]``), following
   generic subclasses that bind ``T`` further down the hierarchy;
3. the annotation of the first parameter of ``handle_event``;
4. ``object``, i.e. every event.

An annotation that names a type which cannot be resolved raises
:class:`~typebus.core.exceptions.ListenerTypeError` rather than widening the
listener to every event.
"""

from __future__ import annotations

import inspect
import sys
import types
import typing
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar, get_args, get_origin

from typebus.core.exceptions import ListenerTypeError
from typebus.domain.ports import EventListener

E = TypeVar("E")


class Listener(ABC, Generic[E]):
    """Base class for listeners of events of type ``E``.

    Example::

        class AuditTrail(Listener[OrderEvent]):
            def handle_event(self, event: OrderEvent) -> None:
                ...
    """

    @abstractmethod
    def handle_event(self, event: E) -> None:
        """Handle *event*.  Raising reports a failure to the dispatcher."""


class FunctionListener(Listener[Any]):
    """Adapts a plain callable into a listener for *event_type*."""

    def __init__(self, event_type: type, func: Callable[[Any], Any]) -> None:
        self.event_type = event_type
        self.func = func

    def handle_event(self, event: Any) -> None:
        self.func(event)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"FunctionListener({self.event_type.__qualname__}, {name})"


_GENERIC_ROOTS: tuple[Any, ...] = (Listener, EventListener)


def resolve_event_type(listener: Any) -> type:
    """Return the event type *listener* declares it handles."""
    explicit = getattr(listener, "event_type", None)
    if explicit is not None and _is_type_like(explicit):
        return as_class(explicit)

    argument = _generic_argument(type(listener), {})
    if argument is not None:
        return as_class(argument)

    annotated = _handler_annotation(listener)
    if annotated is not None:
        return as_class(annotated)

    return object


def as_class(tp: Any) -> type:
    """Reduce a type expression to the runtime class used for matching.

    ``list[int]`` becomes ``list``, ``Annotated[X, ...]`` and ``Optional[X]``
    become ``X``, a ``TypeVar`` becomes its bound.  Anything else that is
    not a class (``Any``, multi-member unions) becomes ``object``.
    """
    if tp is Any:
        return object
    if isinstance(tp, TypeVar):
        return as_class(tp.__bound__) if tp.__bound__ is not None else object

    origin = get_origin(tp)
    if origin is typing.Annotated:
        return as_class(get_args(tp)[0])
    if origin is not None:
        args = [a for a in get_args(tp) if a is not type(None)]
        if _is_union(origin):
            return as_class(args[0]) if len(args) == 1 else object
        return origin if isinstance(origin, type) else object

    if isinstance(tp, type):
        return tp
    return object


def _is_type_like(value: Any) -> bool:
    return isinstance(value, (type, TypeVar)) or get_origin(value) is not None


def _is_union(origin: Any) -> bool:
    return origin is typing.Union or origin is types.UnionType


def _generic_argument(cls: type, bindings: dict[Any, Any]) -> Any:
    """Find ``T`` in ``Listener[T]`` among the (generic) bases of *cls*."""
    for base in cls.__dict__.get("__orig_bases__", cls.__bases__):
        origin = get_origin(base) or base
        args = tuple(bindings.get(a, a) if isinstance(a, TypeVar) else a for a in get_args(base))

        if origin in _GENERIC_ROOTS:
            if args and not _is_open(args[0]):
                return args[0]
            continue

        if not isinstance(origin, type) or origin is object:
            continue
        params = getattr(origin, "__parameters__", ())
        found = _generic_argument(origin, dict(zip(params, args)))
        if found is not None:
            return found
    return None


def _is_open(argument: Any) -> bool:
    """An unbound ``TypeVar`` without a bound says nothing about the event type."""
    return isinstance(argument, TypeVar) and argument.__bound__ is None


def _handler_annotation(listener: Any) -> Any:
    handler = getattr(listener, "handle_event", None)
    if not (inspect.isfunction(handler) or inspect.ismethod(handler)):
        return None

    parameters = list(inspect.signature(handler).parameters.values())
    if not parameters:
        return None
    first = parameters[0]
    if first.annotation is inspect.Parameter.empty:
        return None

    module = sys.modules.get(type(listener).__module__)
    localns = dict(vars(module)) if module is not None else {}
    localns.update(vars(type(listener)))
    try:
        hints = typing.get_type_hints(handler, localns=localns, include_extras=True)
    except (NameError, TypeError) as e:
        if isinstance(first.annotation, str):
            raise ListenerTypeError(
                f"Cannot resolve event type {first.annotation!r} of "
                f"{type(listener).__qualname__}.handle_event",
                {"listener": type(listener).__qualname__, "annotation": first.annotation},
            ) from e
        # Another parameter is unresolvable; the event annotation is usable as is.
        hints = {}
    return hints.get(first.name, first.annotation)
