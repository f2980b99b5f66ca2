"""Tests for typebus.domain.types."""

from abc import ABC
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from typebus.domain.ports import TypeOracle
from typebus.domain.types import HierarchyTable, NativeTypeOracle


class Root:
    pass


class Middle(Root):
    pass


class Leaf(Middle):
    pass


class Marker(ABC):
    pass


class Registered:
    pass


Marker.register(Registered)


@runtime_checkable
class Closable(Protocol):
    def close(self) -> None: ...


class Plain(Protocol):
    def close(self) -> None: ...


class Resource:
    def close(self) -> None:
        pass


class TestNativeTypeOracle:
    def test_subclassing(self):
        oracle = NativeTypeOracle()
        assert oracle.is_assignable(Root, Leaf)
        assert oracle.is_assignable(Leaf, Leaf)
        assert oracle.is_assignable(object, Leaf)
        assert not oracle.is_assignable(Leaf, Root)

    def test_abc_registration(self):
        assert NativeTypeOracle().is_assignable(Marker, Registered)

    def test_structural_interfaces(self):
        oracle = NativeTypeOracle()
        assert oracle.is_assignable(Closable, Resource)
        assert oracle.is_assignable(Iterable, list)
        assert not oracle.is_assignable(Closable, Root)

    def test_non_runtime_protocol_never_matches(self):
        assert not NativeTypeOracle().is_assignable(Plain, Resource)

    def test_satisfies_port(self):
        assert isinstance(NativeTypeOracle(), TypeOracle)


class TestHierarchyTable:
    def test_reflexive(self):
        assert HierarchyTable().is_assignable(Root, Root)

    def test_object_is_universal(self):
        assert HierarchyTable().is_assignable(object, Leaf)

    def test_transitive(self):
        table = HierarchyTable({Leaf: [Middle], Middle: [Root]})
        assert table.is_assignable(Root, Leaf)
        assert table.supertypes_of(Leaf) == {Leaf, Middle, Root, object}

    def test_ignores_python_hierarchy(self):
        # Only declared edges count.
        assert not HierarchyTable().is_assignable(Root, Leaf)

    def test_declare_multiple_supertypes(self):
        table = HierarchyTable()
        table.declare(Resource, Closable, Marker)

        assert table.is_assignable(Closable, Resource)
        assert table.is_assignable(Marker, Resource)
        assert not table.is_assignable(Resource, Closable)
        assert len(table) == 1

    def test_cycles_terminate(self):
        table = HierarchyTable({Root: [Leaf], Leaf: [Root]})
        assert table.supertypes_of(Root) == {Root, Leaf, object}

    def test_satisfies_port(self):
        assert isinstance(HierarchyTable(), TypeOracle)
