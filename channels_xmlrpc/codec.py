"""XML-RPC envelope encoding and decoding.

Values are marshalled by :mod:`xmlrpc.client`; this module only shapes the
envelope: the method name and argument list of a ``methodCall``, and the
single param or fault of a ``methodResponse``.

One :class:`XmlRpcCodec` is shared by the whole process. It holds parser and
marshaller options only, is immutable, and every decode opens its own parse
session, so it is safe to use from concurrent requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from xml.parsers.expat import ExpatError
from xmlrpc.client import Fault, ResponseError, dumps, getparser

from channels_xmlrpc.config import XmlRpcConfig, get_config
from channels_xmlrpc.context import XML_CONTENT_TYPE
from channels_xmlrpc.exceptions import DecodeError
from channels_xmlrpc.naming import NamingConvention, split_method_name
from channels_xmlrpc.protocols import CallDescriptor

logger = logging.getLogger("channels_xmlrpc")

# Errors xmlrpc.client raises on bad input: malformed XML, unbalanced
# elements, a fault document, and unparseable scalar values.
PARSE_ERRORS = (
    ExpatError,
    ResponseError,
    Fault,
    ValueError,
    TypeError,
    IndexError,
    KeyError,
)


@dataclass(frozen=True)
class XmlRpcCodec:
    """Parser and marshaller options for XML-RPC envelopes.

    Attributes
    ----------
    use_datetime : bool
        Decode ``dateTime.iso8601`` values to :class:`datetime.datetime`.
    use_builtin_types : bool
        Decode dates and ``base64`` to builtin types.
    allow_none : bool
        Allow ``None`` to be encoded as ``<nil/>``.
    encoding : str
        Encoding of response documents.
    """

    use_datetime: bool = False
    use_builtin_types: bool = False
    allow_none: bool = False
    encoding: str = "utf-8"

    @classmethod
    def from_config(cls, config: XmlRpcConfig) -> XmlRpcCodec:
        """Build a codec from the package configuration."""
        return cls(
            use_builtin_types=config.use_builtin_types,
            allow_none=config.allow_none,
            encoding=config.encoding,
        )

    def parse(self, body: bytes | str) -> tuple[str, tuple]:
        """Parse a ``methodCall`` document.

        Parameters
        ----------
        body : bytes | str
            Raw request body.

        Returns
        -------
        tuple[str, tuple]
            The method name as received and the unmarshalled arguments.

        Raises
        ------
        DecodeError
            If the body is empty, not well-formed, or has no method name.
        """
        if not body:
            raise DecodeError("empty request body")

        parser, unmarshaller = getparser(
            use_datetime=self.use_datetime,
            use_builtin_types=self.use_builtin_types,
        )
        try:
            parser.feed(body)
            parser.close()
            args = unmarshaller.close()
        except PARSE_ERRORS as e:
            raise DecodeError(f"{type(e).__name__}: {e}") from e

        method_name = unmarshaller.getmethodname()
        if not method_name:
            raise DecodeError("missing methodName")
        return method_name, args

    def decode(
        self,
        body: bytes | str,
        convention: NamingConvention | str = NamingConvention.FLAT,
    ) -> CallDescriptor:
        """Decode a request body into a :class:`CallDescriptor`.

        Parameters
        ----------
        body : bytes | str
            Raw request body.
        convention : NamingConvention | str, optional
            Convention used to split the method name, by default flat.

        Raises
        ------
        DecodeError
            If the body is not a well-formed XML-RPC call.

        Examples
        --------
        >>> codec = XmlRpcCodec()
        >>> body = xmlrpc.client.dumps(("a", "b"), "Foo.Bar.baz")
        >>> codec.decode(body, "segmented")
        CallDescriptor(method_name='baz', target_path='Foo::Bar', args=('a', 'b'), raw_name='Foo.Bar.baz')
        """
        raw_name, args = self.parse(body)
        target_path, method_name = split_method_name(raw_name, convention)
        if not method_name:
            raise DecodeError(f"no method name left in {raw_name!r}")
        return CallDescriptor(
            method_name=method_name,
            target_path=target_path,
            args=tuple(args),
            raw_name=raw_name,
        )

    def encode(self, result: Any) -> tuple[str, bytes]:
        """Encode a result or fault as a ``methodResponse``.

        Parameters
        ----------
        result : Any
            Return value of the remote method, or a :class:`Fault`. ``None``
            is sent as the neutral ``0`` unless ``allow_none`` is set.

        Returns
        -------
        tuple[str, bytes]
            Content type and response body.

        Raises
        ------
        TypeError, OverflowError
            If the codec cannot marshal ``result``.
        """
        if result is None and not self.allow_none:
            result = 0
        params = result if isinstance(result, Fault) else (result,)
        body = dumps(
            params,
            methodresponse=True,
            encoding=self.encoding,
            allow_none=self.allow_none,
        )
        return XML_CONTENT_TYPE, body.encode(self.encoding)


# Process-wide codec instance
_codec: XmlRpcCodec | None = None


def init_codec(config: XmlRpcConfig | None = None) -> XmlRpcCodec:
    """Create the shared codec once.

    Called from ``ChannelsXmlRpcConfig.ready()`` at startup. Later calls return
    the existing instance and ignore ``config``.
    """
    global _codec
    if _codec is None:
        _codec = XmlRpcCodec.from_config(config or get_config())
        logger.debug("Initialized shared XML-RPC codec: %s", _codec)
    return _codec


def get_codec() -> XmlRpcCodec:
    """Get the shared codec, creating it on first use."""
    return init_codec()


def reset_codec() -> None:
    """Drop the shared codec. Intended for tests."""
    global _codec
    _codec = None
