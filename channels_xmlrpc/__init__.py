"""XML-RPC dispatch for Django Channels consumers.

A consumer class exposes selected methods as XML-RPC endpoints by marking
them with :func:`remote`. Its entry action decodes the request, resolves the
method name, invokes the method and encodes the result.

Public API
----------
Consumers:
    - XmlRpcBase: Dispatcher mixin for any consumer
    - AsyncXmlRpcHttpConsumer: Async HTTP XML-RPC consumer

Marker:
    - remote: Decorator marking a method as remote-invokable

Context:
    - XmlRpcContext: Per-request context passed to remote methods

Codec:
    - XmlRpcCodec: Envelope encoder and decoder
    - NamingConvention: ``flat`` or ``segmented`` method names

Exceptions:
    - XmlRpcError, DecodeError, MethodNotFound, NotAuthorized
    - XmlRpcFaultCode: Fault codes produced by the dispatcher

Configuration:
    Configure behavior via Django settings::

        CHANNELS_XMLRPC = {
            'NAMING_CONVENTION': 'segmented',
            'STRICT_RESOLUTION': False,
            'MAX_BODY_SIZE': 20 * 1024 * 1024,
        }
"""

from channels_xmlrpc.async_xmlrpc_http_consumer import AsyncXmlRpcHttpConsumer
from channels_xmlrpc.codec import XmlRpcCodec
from channels_xmlrpc.context import XmlRpcContext
from channels_xmlrpc.decorators import remote
from channels_xmlrpc.exceptions import (
    DecodeError,
    MethodNotFound,
    NotAuthorized,
    XmlRpcError,
    XmlRpcFaultCode,
)
from channels_xmlrpc.naming import NamingConvention
from channels_xmlrpc.xmlrpc_base import XmlRpcBase

__all__ = [
    "AsyncXmlRpcHttpConsumer",
    "DecodeError",
    "MethodNotFound",
    "NamingConvention",
    "NotAuthorized",
    "XmlRpcBase",
    "XmlRpcCodec",
    "XmlRpcContext",
    "XmlRpcError",
    "XmlRpcFaultCode",
    "remote",
]
