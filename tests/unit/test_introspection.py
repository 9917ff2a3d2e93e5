"""Tests for consumer introspection.

Coverage: XmlRpcBase.get_remote_methods(), get_method_info().
"""

from __future__ import annotations

import pytest

from channels_xmlrpc.context import XmlRpcContext
from channels_xmlrpc.decorators import remote
from channels_xmlrpc.protocols import INSTANCE_BINDING, STATIC_BINDING
from channels_xmlrpc.xmlrpc_base import XmlRpcBase


@pytest.mark.unit
class TestGetRemoteMethods:
    """Test get_remote_methods() class method."""

    def test_lists_remote_methods_only(self, consumer_class):
        """Should omit methods without the Remote marker."""
        methods = consumer_class.get_remote_methods()

        assert set(methods) == {"echo", "add", "observe", "explode"}
        assert "helper" not in methods

    def test_includes_inherited_methods(self, consumer_class):
        """Should list methods from base classes."""

        class Extended(consumer_class):
            @remote()
            def extra(self):
                return 1

        methods = Extended.get_remote_methods()

        assert "echo" in methods
        assert "extra" in methods

    def test_unmarked_override_hides_remote_base(self, consumer_class):
        """Should drop a name overridden without the marker."""

        class Override(consumer_class):
            def echo(self, *args):
                return "local"

        assert "echo" not in Override.get_remote_methods()

    def test_empty_consumer(self):
        """Should return an empty list for a consumer without methods."""

        class Empty(XmlRpcBase):
            pass

        assert Empty.get_remote_methods() == []


@pytest.mark.unit
class TestGetMethodInfo:
    """Test get_method_info() class method."""

    def test_method_info(self):
        """Should describe a remote method."""

        class Api(XmlRpcBase):
            @remote()
            def add(self, ctx: XmlRpcContext, a: int, b: int) -> int:
                """Add two numbers."""
                return a + b

        info = Api.get_method_info("add")

        assert info.name == "add"
        assert info.docstring == "Add two numbers."
        assert info.accepts_context is True
        assert info.binding == INSTANCE_BINDING
        assert "a: 'int'" in info.signature or "a: int" in info.signature
        assert info.reverse == "-> Api->add"

    def test_free_function_info(self):
        """Should describe functions registered with remote_method()."""

        class Api(XmlRpcBase):
            pass

        @Api.remote_method("double")
        def double(value):
            return value * 2

        info = Api.get_method_info("double")

        assert info.binding == STATIC_BINDING
        assert info.accepts_context is False
        assert info.signature == "(value)"

    def test_unknown_method_raises(self):
        """Should raise KeyError for an unknown method."""

        class Api(XmlRpcBase):
            pass

        with pytest.raises(KeyError):
            Api.get_method_info("missing")

    def test_unmarked_method_raises(self):
        """Should raise KeyError for a method without the marker."""

        class Api(XmlRpcBase):
            def helper(self):
                return 1

        with pytest.raises(KeyError):
            Api.get_method_info("helper")
