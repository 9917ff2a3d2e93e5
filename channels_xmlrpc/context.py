"""XML-RPC execution context."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

XML_CONTENT_TYPE = "text/xml"


@dataclass
class XmlRpcResponse:
    """Outgoing response written by the dispatcher.

    Attributes
    ----------
    content_type : str
        Response content type.
    body : bytes
        Encoded ``methodResponse`` document.
    status : int
        HTTP status code.
    """

    content_type: str = XML_CONTENT_TYPE
    body: bytes = b""
    status: int = 200


@dataclass
class XmlRpcContext:
    """Per-request context for XML-RPC dispatch.

    Bundles the request body, the positional arguments, the response and the
    execution state the way a framework request context does. Remote methods
    that take a context receive a child of the caller's context carrying the
    XML-RPC arguments; everything else is shared with the caller.

    Attributes
    ----------
    consumer : Any
        The consumer handling this request.
    body : bytes
        Raw request body.
    args : list
        Positional arguments of the current action.
    state : Any
        Result of the last executed action.
    components : dict[type, Any]
        Live instances keyed by class, used to resolve call targets.
    response : XmlRpcResponse
        Response being built.
    errors : list[Exception]
        Errors raised by executed actions.
    method_name : str | None
        Name of the remote method being executed.
    reverse : str | None
        Human-readable route of the remote method being executed.

    Examples
    --------
    >>> class Calculator(AsyncXmlRpcHttpConsumer):
    ...     @remote()
    ...     def add(self, ctx: XmlRpcContext, a, b):
    ...         logger.info("%s called from %s", ctx.reverse, ctx.scope.get("client"))
    ...         return a + b
    """

    consumer: Any
    body: bytes = b""
    args: list[Any] = field(default_factory=list)
    state: Any = None
    components: dict[type, Any] = field(default_factory=dict)
    response: XmlRpcResponse = field(default_factory=XmlRpcResponse)
    errors: list[Exception] = field(default_factory=list)
    method_name: str | None = None
    reverse: str | None = None

    @property
    def scope(self) -> dict[str, Any]:
        """Get the ASGI scope from the consumer, or ``{}`` when there is none."""
        return getattr(self.consumer, "scope", None) or {}

    def with_args(self, args: Any, **changes: Any) -> XmlRpcContext:
        """Create a child context carrying ``args``.

        The child shares the consumer, body, components, response and error
        list with this context; assigning ``args`` or ``state`` on it leaves
        this context untouched.
        """
        return replace(self, args=list(args), **changes)
