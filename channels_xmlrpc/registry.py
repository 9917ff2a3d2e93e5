"""Method and namespace registry for XML-RPC consumers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from weakref import WeakKeyDictionary, WeakValueDictionary

if TYPE_CHECKING:
    from channels_xmlrpc.protocols import RemoteMethodWrapper


class MethodRegistry:
    """Dispatch tables for XML-RPC consumers.

    Each consumer class gets a table mapping method names to registry
    entries, filled when the class is created. Entries carry the Remote
    capability flag, so a request never has to inspect the class itself.
    Uses weak references so consumer classes defined at runtime (e.g. in
    tests) can be garbage collected.

    Attributes
    ----------
    _methods : WeakKeyDictionary
        Mapping of consumer classes to their method tables.
    _namespaces : WeakValueDictionary
        Mapping of namespaces to consumer classes.
    _reverse : WeakKeyDictionary
        Memoized route labels per consumer class and method name.
    """

    def __init__(self) -> None:
        """Initialize the registry."""
        self._methods: WeakKeyDictionary = WeakKeyDictionary()
        self._namespaces: WeakValueDictionary = WeakValueDictionary()
        self._reverse: WeakKeyDictionary = WeakKeyDictionary()

    def register_method(
        self,
        consumer_class: type,
        method_name: str,
        method: RemoteMethodWrapper,
    ) -> None:
        """Register a method for a consumer class.

        Parameters
        ----------
        consumer_class : type
            The consumer class to register the method for.
        method_name : str
            Name the method is called by.
        method : RemoteMethodWrapper
            The registry entry.
        """
        if consumer_class not in self._methods:
            self._methods[consumer_class] = {}
        self._methods[consumer_class][method_name] = method
        self._reverse.get(consumer_class, {}).pop(method_name, None)

    def get_methods(self, consumer_class: type) -> dict[str, RemoteMethodWrapper]:
        """Get the methods registered directly on a consumer class."""
        return self._methods.get(consumer_class, {})

    def get_method(
        self, consumer_class: type, method_name: str
    ) -> RemoteMethodWrapper | None:
        """Get a method registered directly on ``consumer_class``.

        Returns
        -------
        RemoteMethodWrapper | None
            The entry if found, None otherwise.
        """
        methods: dict[str, RemoteMethodWrapper] = self._methods.get(consumer_class, {})
        return methods.get(method_name)

    def resolve(
        self, consumer_class: type, method_name: str
    ) -> RemoteMethodWrapper | None:
        """Find a method on ``consumer_class`` or one of its bases.

        The class MRO is walked in order so subclasses override their bases,
        as with normal attribute lookup.

        Returns
        -------
        RemoteMethodWrapper | None
            The first entry found, None otherwise.
        """
        for klass in consumer_class.__mro__:
            method = self.get_method(klass, method_name)
            if method is not None:
                return method
        return None

    def has_method(self, consumer_class: type, method_name: str) -> bool:
        """Check if a method is available on a class or its bases."""
        return self.resolve(consumer_class, method_name) is not None

    def list_method_names(self, consumer_class: type) -> list[str]:
        """List every method name available on a class, bases included."""
        names: dict[str, None] = {}
        for klass in reversed(consumer_class.__mro__):
            names.update(dict.fromkeys(self._methods.get(klass, {})))
        return list(names)

    def list_remote_method_names(self, consumer_class: type) -> list[str]:
        """List the names that resolve to remote-invokable methods."""
        return [
            name
            for name in self.list_method_names(consumer_class)
            if self.resolve(consumer_class, name).remote
        ]

    def register_namespace(self, namespace: str, consumer_class: type) -> None:
        """Register ``consumer_class`` under ``namespace``.

        A later registration under the same namespace replaces the earlier
        one.
        """
        self._namespaces[namespace] = consumer_class

    def get_class(self, namespace: str) -> type | None:
        """Get the consumer class registered under ``namespace``."""
        return self._namespaces.get(namespace)

    def reverse_route(self, consumer_class: type, method: RemoteMethodWrapper) -> str:
        """Human-readable route for a resolved call.

        Computed once per class and method, e.g. ``"-> Calculator->add"``.
        """
        routes = self._reverse.get(consumer_class)
        if routes is None:
            routes = self._reverse[consumer_class] = {}
        if method.name not in routes:
            routes[method.name] = f"-> {consumer_class.__name__}->{method.name}"
        return routes[method.name]


# Global registry instance
_registry = MethodRegistry()


def get_registry() -> MethodRegistry:
    """Get the global method registry.

    Returns
    -------
    MethodRegistry
        The global registry instance.
    """
    return _registry
