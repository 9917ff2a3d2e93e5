"""Exceptions for the channels-xmlrpc package."""

from __future__ import annotations

from enum import IntEnum
from xmlrpc.client import Fault


class XmlRpcFaultCode(IntEnum):
    """Fault codes produced by the dispatcher itself.

    Attributes
    ----------
    INVALID_REQUEST : int
        The request body is not a well-formed XML-RPC call (-1).
    METHOD_NOT_FOUND : int
        The method does not exist or is not remote-invokable (-32601). Only
        sent when strict resolution is enabled; the two cases deliberately
        share this code and message.
    """

    INVALID_REQUEST = -1
    METHOD_NOT_FOUND = -32601


FAULT_MESSAGES: dict[int, str] = {
    XmlRpcFaultCode.INVALID_REQUEST: "Invalid request",
    XmlRpcFaultCode.METHOD_NOT_FOUND: "Method not found",
}


def generate_fault(code: int, message: str | None = None) -> Fault:
    """Build a :class:`xmlrpc.client.Fault`.

    Parameters
    ----------
    code : int
        Fault code.
    message : str, optional
        Fault string. Defaults to the standard message for ``code``.

    Returns
    -------
    Fault
        Fault ready to be encoded as a response.
    """
    if message is None:
        message = FAULT_MESSAGES[code]
    return Fault(int(code), message)


class XmlRpcError(Exception):
    """Base class for dispatcher errors.

    These never leave :meth:`XmlRpcBase.xmlrpc`; each one is converted into a
    fault or a neutral result there.
    """

    code: int = XmlRpcFaultCode.INVALID_REQUEST

    def __init__(self, message: str = "", *, method_name: str | None = None):
        super().__init__(message)
        self.message = message
        self.method_name = method_name

    def as_fault(self) -> Fault:
        """Return the fault sent to the client for this error.

        The fault string is the generic message for the code, so internal
        details never reach the caller.
        """
        return generate_fault(self.code)


class DecodeError(XmlRpcError):
    """The request body is not a well-formed XML-RPC ``methodCall``."""


class RequestTooLargeError(DecodeError):
    """The request exceeds a configured size limit."""

    def __init__(self, limit_type: str, limit_value: int):
        """Initialize RequestTooLargeError.

        Parameters
        ----------
        limit_type : str
            Type of limit exceeded (e.g., "body_size", "method_name_length").
        limit_value : int
            The limit that was exceeded.
        """
        super().__init__(f"{limit_type} exceeds limit of {limit_value}")
        self.limit_type = limit_type
        self.limit = limit_value


class MethodNotFound(XmlRpcError):
    """No method with the requested name exists on the target class."""

    code = XmlRpcFaultCode.METHOD_NOT_FOUND


class NotAuthorized(XmlRpcError):
    """The method exists but is not marked as remote-invokable."""

    code = XmlRpcFaultCode.METHOD_NOT_FOUND
