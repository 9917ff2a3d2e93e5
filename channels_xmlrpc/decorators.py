"""The Remote marker and shared helpers for building registry entries.

A consumer method becomes callable over XML-RPC only when it is decorated
with :func:`remote`. The marker is recorded in the registry when the class is
created; nothing is inspected at request time.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from channels_xmlrpc.protocols import (
    CLASS_BINDING,
    INSTANCE_BINDING,
    STATIC_BINDING,
    RemoteMethodWrapper,
)

logger = logging.getLogger("channels_xmlrpc")


def inspect_accepts_context(func: Callable, *, skip_first: bool = False) -> bool:
    """Check if a function takes an XmlRpcContext before its XML-RPC arguments.

    Parameters
    ----------
    func : Callable
        Function to inspect.
    skip_first : bool, optional
        Skip the first parameter (``self`` or ``cls``) regardless of its name.
        A first parameter named ``self`` is always skipped.

    Returns
    -------
    bool
        True if the first parameter (after self) is annotated with
        XmlRpcContext. False if inspection fails or no such parameter exists.

    Notes
    -----
    This function never raises. String annotations (from
    ``from __future__ import annotations``) are recognised by name.

    Examples
    --------
    >>> def method_with_context(ctx: XmlRpcContext, value: int) -> int:
    ...     return value * 2
    >>> inspect_accepts_context(method_with_context)
    True

    >>> def method_without_context(value: int) -> int:
    ...     return value * 2
    >>> inspect_accepts_context(method_without_context)
    False
    """
    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError) as e:
        logger.debug(
            "Failed to inspect function %s for XmlRpcContext parameter: %s",
            getattr(func, "__name__", "<unknown>"),
            e,
        )
        return False

    first_param_idx = 1 if (skip_first or (params and params[0].name == "self")) else 0
    if len(params) <= first_param_idx:
        return False

    first_param = params[first_param_idx]
    if first_param.kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        return False

    annotation = first_param.annotation
    if annotation is inspect.Parameter.empty:
        return False

    if annotation == "XmlRpcContext" or getattr(annotation, "__name__", "") == (
        "XmlRpcContext"
    ):
        return True

    from channels_xmlrpc.context import XmlRpcContext

    return annotation is XmlRpcContext


def create_remote_method_wrapper(
    func: Callable,
    name: str,
    *,
    remote: bool = True,
    binding: str = INSTANCE_BINDING,
    accepts_context: bool | None = None,
) -> RemoteMethodWrapper:
    """Create a registry entry with cached introspection.

    Parameters
    ----------
    func : Callable
        The function to wrap.
    name : str
        Name the method is called by over XML-RPC.
    remote : bool, optional
        Whether the method carries the Remote marker, by default True.
    binding : str, optional
        ``"instance"``, ``"class"`` or ``"static"``, by default instance.
    accepts_context : bool | None, optional
        Whether the function accepts XmlRpcContext. Auto-detected when None.

    Returns
    -------
    RemoteMethodWrapper
        Entry ready to be registered.

    Raises
    ------
    ValueError
        If ``name`` contains a dot. Dots in requests are consumed by the
        naming convention, so such a name could never be called.
    """
    if "." in name:
        msg = (
            f"XML-RPC method name {name!r} cannot contain '.'; register the "
            "class under a namespace instead"
        )
        raise ValueError(msg)

    if accepts_context is None:
        accepts_context = inspect_accepts_context(
            func, skip_first=binding != STATIC_BINDING
        )

    return RemoteMethodWrapper(
        func=func,
        name=name,
        remote=remote,
        accepts_context=accepts_context,
        binding=binding,
    )


def _unwrap(method: Any) -> tuple[Callable, str]:
    """Return the function behind a class attribute and how it binds."""
    if isinstance(method, staticmethod):
        return method.__func__, STATIC_BINDING
    if isinstance(method, classmethod):
        return method.__func__, CLASS_BINDING
    return method, INSTANCE_BINDING


def remote(
    method_name: str | Callable | None = None,
    *,
    context: bool | None = None,
) -> Any:
    """Mark a consumer method as remote-invokable.

    This is the only authorization check the dispatcher performs: public
    methods without the marker are still known to the registry, but calls to
    them are refused.

    Parameters
    ----------
    method_name : str, optional
        XML-RPC name for the method, by default the function name.
    context : bool | None, optional
        Force whether the method receives the XmlRpcContext. Auto-detected
        from the annotation of its first parameter when None.

    Returns
    -------
    Callable
        Decorator returning a :class:`RemoteMethodWrapper`.

    Examples
    --------
    Methods in the same class as the entry point::

        class Api(AsyncXmlRpcHttpConsumer):
            @remote()
            def echo(self, *args):
                return " ".join(args)

            @remote("sum")
            def add(self, ctx: XmlRpcContext, a, b):
                return a + b

            @remote
            @staticmethod
            def version():
                return "1.0"
    """
    if callable(method_name) or isinstance(method_name, staticmethod | classmethod):
        return remote()(method_name)

    def wrap(method: Any) -> RemoteMethodWrapper:
        func, binding = _unwrap(method)
        return create_remote_method_wrapper(
            func,
            method_name or func.__name__,
            binding=binding,
            accepts_context=context,
        )

    return wrap


def wrapper_for_attribute(attr_name: str, value: Any) -> RemoteMethodWrapper | None:
    """Build the registry entry for a class attribute.

    Remote-marked methods are returned as they are. Other public functions,
    static methods and class methods get an entry without the marker, so a
    call to them can be told apart from a call to an unknown name. Anything
    else returns None.
    """
    if isinstance(value, RemoteMethodWrapper):
        return value
    if attr_name.startswith("_"):
        return None
    if not (inspect.isfunction(value) or isinstance(value, staticmethod | classmethod)):
        return None

    func, binding = _unwrap(value)
    return create_remote_method_wrapper(
        func, attr_name, remote=False, binding=binding, accepts_context=False
    )
