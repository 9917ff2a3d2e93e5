"""Shared test fixtures for channels-xmlrpc test suite."""

from __future__ import annotations

import os

# Configure Django settings before any Django imports
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tests.settings")

import django

django.setup()

import pytest

from channels_xmlrpc.codec import XmlRpcCodec, reset_codec
from channels_xmlrpc.config import reset_config
from channels_xmlrpc.context import XmlRpcContext
from channels_xmlrpc.decorators import remote
from channels_xmlrpc.xmlrpc_base import XmlRpcBase
from tests.fixtures.xml_rpc_helpers import make_call

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_shared_state():
    """Drop cached configuration and codec around every test."""
    reset_config()
    reset_codec()
    yield
    reset_config()
    reset_codec()


@pytest.fixture
def codec():
    """Default codec."""
    return XmlRpcCodec()


@pytest.fixture
def call_body():
    """Factory fixture for methodCall bodies."""
    return make_call


# ============================================================================
# Mock Consumer Classes
# ============================================================================


class MockXmlRpcConsumer(XmlRpcBase):
    """Mock XML-RPC consumer for testing."""

    def __init__(self, scope=None):
        self.scope = scope or {"type": "http", "method": "POST"}


@pytest.fixture
def mock_http_scope():
    """Mock Django Channels scope for HTTP."""
    return {
        "type": "http",
        "method": "POST",
        "path": "/rpc/",
        "headers": [],
        "query_string": b"",
    }


# ============================================================================
# Consumers with Registered Methods
# ============================================================================


@pytest.fixture
def consumer_class():
    """Consumer class with remote, non-remote and failing methods.

    ``calls`` records every invocation as ``(method_name, args)``.
    """

    class TestConsumer(MockXmlRpcConsumer):
        rpc_namespace = "TestConsumer"

        def __init__(self, scope=None):
            super().__init__(scope)
            self.calls = []

        @remote()
        def echo(self, *args):
            self.calls.append(("echo", args))
            return " ".join(args)

        @remote()
        def add(self, a, b):
            self.calls.append(("add", (a, b)))
            return a + b

        @remote()
        def observe(self, ctx: XmlRpcContext, *args):
            self.calls.append(("observe", tuple(ctx.args)))
            return list(ctx.args)

        @remote()
        def explode(self, ctx: XmlRpcContext, *args):
            self.calls.append(("explode", tuple(ctx.args)))
            raise ValueError("boom")

        def helper(self, *args):
            self.calls.append(("helper", args))
            return "should not be reachable"

    return TestConsumer


@pytest.fixture
def consumer(consumer_class, mock_http_scope):
    """Instance of the consumer with registered methods."""
    return consumer_class(mock_http_scope)


@pytest.fixture
def make_context(consumer):
    """Factory fixture for request contexts on ``consumer``."""

    def _make_context(body: bytes, args=None) -> XmlRpcContext:
        return consumer.build_context(body, args)

    return _make_context
