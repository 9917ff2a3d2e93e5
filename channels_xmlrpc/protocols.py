"""Shared data structures for the dispatcher.

Kept in one module to avoid circular imports between the codec, the registry
and the consumer base class.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from asgiref.sync import async_to_sync

from channels_xmlrpc.naming import join_namespace

if TYPE_CHECKING:
    from channels_xmlrpc.context import XmlRpcContext

INSTANCE_BINDING = "instance"
CLASS_BINDING = "class"
STATIC_BINDING = "static"


@dataclass(frozen=True)
class CallDescriptor:
    """A decoded XML-RPC call.

    Attributes
    ----------
    method_name : str
        Method name after the naming convention was applied.
    target_path : str
        Namespace of the target consumer, ``""`` for the receiving consumer.
    args : tuple
        Positional arguments in call order.
    raw_name : str
        ``methodName`` exactly as received.
    """

    method_name: str
    target_path: str = ""
    args: tuple = ()
    raw_name: str = ""

    @property
    def qualified_name(self) -> str:
        """Target path and method name joined by the namespace separator."""
        return join_namespace(self.target_path, self.method_name)


@dataclass(eq=False)
class RemoteMethodWrapper:
    """Registry entry for a consumer method.

    Every public method of a consumer class gets an entry; only entries with
    ``remote`` set may be invoked over XML-RPC.

    Attributes
    ----------
    func : Callable
        The underlying function.
    name : str
        Name the method is called by over XML-RPC.
    remote : bool
        Whether the method carries the Remote marker.
    accepts_context : bool
        Whether the function takes an :class:`XmlRpcContext` before its
        XML-RPC arguments.
    binding : str
        ``"instance"`` (first argument is the live consumer, or the class
        when no instance exists), ``"class"`` or ``"static"``.

    Notes
    -----
    The wrapper supports the descriptor protocol, so a decorated method can
    still be called normally from Python code.
    """

    func: Callable[..., Any]
    name: str
    remote: bool = True
    accepts_context: bool = False
    binding: str = INSTANCE_BINDING

    def __post_init__(self) -> None:
        """Mimic the wrapped function's name."""
        object.__setattr__(self, "__name__", getattr(self.func, "__name__", self.name))
        object.__setattr__(
            self, "__qualname__", getattr(self.func, "__qualname__", self.name)
        )
        object.__setattr__(self, "__doc__", getattr(self.func, "__doc__", None))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Make the wrapper callable."""
        return self.func(*args, **kwargs)

    def __get__(self, obj: Any, objtype: Any = None) -> Callable[..., Any]:
        """Bind like the function, classmethod or staticmethod it wraps."""
        if self.binding == STATIC_BINDING:
            return self.func
        if self.binding == CLASS_BINDING:
            return functools.partial(self.func, objtype or type(obj))
        if obj is None:
            return self
        return functools.partial(self.func, obj)

    def invoke(self, target: Any, ctx: XmlRpcContext) -> Any:
        """Call the method for an XML-RPC request.

        Parameters
        ----------
        target : Any
            Live instance, or the class itself for class-scoped targets.
        ctx : XmlRpcContext
            Context whose ``args`` are the XML-RPC arguments.

        Notes
        -----
        Coroutine methods are run to completion with
        :func:`asgiref.sync.async_to_sync`, so this must not be called from
        the thread running the event loop.
        """
        args: list[Any] = list(ctx.args)
        if self.accepts_context:
            args.insert(0, ctx)
        if self.binding == CLASS_BINDING:
            args.insert(0, target if isinstance(target, type) else type(target))
        elif self.binding == INSTANCE_BINDING:
            args.insert(0, target)

        result = self.func(*args)
        if asyncio.iscoroutine(result):
            result = async_to_sync(_await)(result)
        return result


async def _await(awaitable: Any) -> Any:
    return await awaitable


@dataclass(frozen=True)
class ResolvedTarget:
    """Outcome of looking a call up in the registry.

    Attributes
    ----------
    target_class : type
        Class the method was resolved against.
    method : RemoteMethodWrapper
        Registry entry found for the name.
    is_remote_authorized : bool
        Whether the entry carries the Remote marker.
    """

    target_class: type
    method: RemoteMethodWrapper
    is_remote_authorized: bool


@dataclass
class MethodInfo:
    """Metadata about a remote method.

    Attributes
    ----------
    name : str
        Method name as registered.
    func : Callable
        The actual function.
    signature : str
        String representation of function signature.
    docstring : str | None
        Method docstring if available.
    accepts_context : bool
        Whether method accepts XmlRpcContext parameter.
    binding : str
        How the method is bound when invoked.
    reverse : str
        Human-readable route label.
    """

    name: str
    func: Callable
    signature: str
    docstring: str | None
    accepts_context: bool
    binding: str
    reverse: str = field(default="")
