"""Tests for method registry."""

import gc
import weakref

import pytest

from channels_xmlrpc.decorators import create_remote_method_wrapper, remote
from channels_xmlrpc.registry import MethodRegistry, get_registry
from channels_xmlrpc.xmlrpc_base import XmlRpcBase


def _wrapper(name, *, remote=True):
    return create_remote_method_wrapper(lambda self: None, name, remote=remote)


@pytest.mark.unit
class TestMethodRegistry:
    """Test MethodRegistry class."""

    def test_register_and_get_method(self):
        """Should register and retrieve methods."""
        registry = MethodRegistry()

        class TestClass:
            pass

        wrapper = _wrapper("test")
        registry.register_method(TestClass, "test", wrapper)

        retrieved = registry.get_method(TestClass, "test")
        assert retrieved == wrapper
        assert retrieved.name == "test"

    def test_get_methods_returns_dict(self):
        """Should return all methods as a dictionary."""
        registry = MethodRegistry()

        class TestClass:
            pass

        registry.register_method(TestClass, "method1", _wrapper("method1"))
        registry.register_method(TestClass, "method2", _wrapper("method2"))

        methods = registry.get_methods(TestClass)
        assert len(methods) == 2
        assert "method1" in methods
        assert "method2" in methods

    def test_get_nonexistent_method(self):
        """Should return None for an unknown method."""
        registry = MethodRegistry()

        class TestClass:
            pass

        assert registry.get_method(TestClass, "missing") is None
        assert registry.get_methods(TestClass) == {}

    def test_resolve_walks_mro(self):
        """Should find methods registered on base classes."""
        registry = MethodRegistry()

        class Base:
            pass

        class Child(Base):
            pass

        wrapper = _wrapper("inherited")
        registry.register_method(Base, "inherited", wrapper)

        assert registry.resolve(Child, "inherited") is wrapper
        assert registry.get_method(Child, "inherited") is None
        assert registry.has_method(Child, "inherited")

    def test_subclass_overrides_base(self):
        """Should prefer the entry closest to the class in the MRO."""
        registry = MethodRegistry()

        class Base:
            pass

        class Child(Base):
            pass

        base_wrapper = _wrapper("m")
        child_wrapper = _wrapper("m", remote=False)
        registry.register_method(Base, "m", base_wrapper)
        registry.register_method(Child, "m", child_wrapper)

        assert registry.resolve(Child, "m") is child_wrapper
        assert registry.resolve(Base, "m") is base_wrapper

    def test_list_remote_method_names(self):
        """Should list only names resolving to remote entries."""
        registry = MethodRegistry()

        class TestClass:
            pass

        registry.register_method(TestClass, "public", _wrapper("public"))
        registry.register_method(
            TestClass, "helper", _wrapper("helper", remote=False)
        )

        assert registry.list_method_names(TestClass) == ["public", "helper"]
        assert registry.list_remote_method_names(TestClass) == ["public"]

    def test_namespaces(self):
        """Should map namespaces to classes, later registrations winning."""
        registry = MethodRegistry()

        class First:
            pass

        class Second:
            pass

        registry.register_namespace("Api::Math", First)
        assert registry.get_class("Api::Math") is First

        registry.register_namespace("Api::Math", Second)
        assert registry.get_class("Api::Math") is Second
        assert registry.get_class("Api::Other") is None

    def test_reverse_route_memoized(self):
        """Should build the route label once."""
        registry = MethodRegistry()

        class Calculator:
            pass

        wrapper = _wrapper("add")
        registry.register_method(Calculator, "add", wrapper)

        first = registry.reverse_route(Calculator, wrapper)
        assert first == "-> Calculator->add"
        assert registry.reverse_route(Calculator, wrapper) is first

    def test_reregistering_resets_reverse_route(self):
        """Should drop the memoized route when an entry is replaced."""
        registry = MethodRegistry()

        class Calculator:
            pass

        wrapper = _wrapper("add")
        registry.register_method(Calculator, "add", wrapper)
        first = registry.reverse_route(Calculator, wrapper)

        registry.register_method(Calculator, "add", _wrapper("add"))

        assert "add" not in registry._reverse[Calculator]
        assert registry.reverse_route(Calculator, wrapper) == first

    def test_weak_references_allow_gc(self):
        """Should not keep consumer classes alive."""
        registry = MethodRegistry()

        class Temporary:
            pass

        registry.register_method(Temporary, "m", _wrapper("m"))
        registry.register_namespace("Temporary", Temporary)
        ref = weakref.ref(Temporary)

        del Temporary
        gc.collect()

        assert ref() is None
        assert registry.get_class("Temporary") is None


@pytest.mark.unit
class TestClassRegistration:
    """Test dispatch tables built when XmlRpcBase subclasses are created."""

    def test_global_registry_singleton(self):
        """Should always return the same registry."""
        assert get_registry() is get_registry()

    def test_every_public_method_recorded(self):
        """Should record remote and unmarked public methods."""

        class Api(XmlRpcBase):
            @remote()
            def visible(self):
                return 1

            def hidden(self):
                return 2

            def _private(self):
                return 3

            constant = 4

        methods = get_registry().get_methods(Api)

        assert set(methods) == {"visible", "hidden"}
        assert methods["visible"].remote is True
        assert methods["hidden"].remote is False

    def test_namespace_defaults_to_class_name(self):
        """Should register the class under its own name."""

        class NamedApi(XmlRpcBase):
            pass

        assert NamedApi.get_rpc_namespace() == "NamedApi"
        assert get_registry().get_class("NamedApi") is NamedApi

    def test_namespace_not_inherited(self):
        """Should not inherit an explicit namespace from a base class."""

        class Parent(XmlRpcBase):
            rpc_namespace = "Shop::Parent"

        class Kid(Parent):
            pass

        assert Parent.get_rpc_namespace() == "Shop::Parent"
        assert Kid.get_rpc_namespace() == "Kid"
        assert get_registry().get_class("Shop::Parent") is Parent
