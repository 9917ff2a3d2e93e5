"""Request size limits for security.

Oversized requests are rejected before they reach a consumer method. They are
reported to the client the same way as any other malformed request.

Examples
--------
Configure limits in Django settings.py::

    CHANNELS_XMLRPC = {
        'MAX_BODY_SIZE': 20 * 1024 * 1024,  # 20MB
        'MAX_METHOD_NAME_LENGTH': 128,
    }
"""

from __future__ import annotations

from channels_xmlrpc.config import XmlRpcLimits, get_config
from channels_xmlrpc.exceptions import RequestTooLargeError


def check_body_size(body: bytes | str, limits: XmlRpcLimits | None = None) -> None:
    """Check the request body against ``max_body_size``.

    Raises
    ------
    RequestTooLargeError
        If the body is larger than the limit.
    """
    limits = limits or get_config().limits
    if len(body) > limits.max_body_size:
        raise RequestTooLargeError("body_size", limits.max_body_size)


def check_method_name_length(
    method_name: str, limits: XmlRpcLimits | None = None
) -> None:
    """Check a received method name against ``max_method_name_length``.

    Raises
    ------
    RequestTooLargeError
        If the name is longer than the limit.
    """
    limits = limits or get_config().limits
    if len(method_name) > limits.max_method_name_length:
        raise RequestTooLargeError(
            "method_name_length", limits.max_method_name_length
        )
