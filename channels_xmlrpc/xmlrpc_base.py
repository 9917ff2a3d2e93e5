"""Definition of the :class:`XmlRpcBase` class.

An XML-RPC request names a *method*, optionally qualified with dots, and
carries a list of positional *params*. The consumer receiving the request
acts as the entry point: it decodes the call, resolves the method against
itself or another consumer class, invokes it if it carries the Remote
marker, and writes the result back as a ``methodResponse``.

Failures never escape :meth:`XmlRpcBase.xmlrpc`:

- A malformed request gets ``Fault(-1, "Invalid request")``.
- An unknown method, or one without the Remote marker, gets the neutral
  result ``0`` and a debug log line. The client cannot tell the two apart.
  With strict resolution both get ``Fault(-32601, "Method not found")``.
- Errors raised by the method itself are recorded on the context and
  logged; the result is ``0``. Methods send their own faults by raising or
  returning :class:`xmlrpc.client.Fault`.

References
----------
- http://xmlrpc.com/spec.md
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Callable
from typing import Any
from xmlrpc.client import Fault

from channels_xmlrpc import logs
from channels_xmlrpc.codec import XmlRpcCodec
from channels_xmlrpc.codec import get_codec as get_shared_codec
from channels_xmlrpc.config import get_config
from channels_xmlrpc.context import XmlRpcContext
from channels_xmlrpc.decorators import (
    create_remote_method_wrapper,
    wrapper_for_attribute,
)
from channels_xmlrpc.exceptions import (
    DecodeError,
    MethodNotFound,
    NotAuthorized,
    XmlRpcError,
)
from channels_xmlrpc.limits import check_body_size, check_method_name_length
from channels_xmlrpc.naming import NamingConvention, join_namespace
from channels_xmlrpc.protocols import (
    STATIC_BINDING,
    CallDescriptor,
    MethodInfo,
    RemoteMethodWrapper,
    ResolvedTarget,
)
from channels_xmlrpc.registry import get_registry
from channels_xmlrpc.signals import (
    xmlrpc_method_completed,
    xmlrpc_method_failed,
    xmlrpc_method_started,
)

logger = logging.getLogger("channels_xmlrpc")


class XmlRpcBase:
    """Base class for XML-RPC consumers.

    Creating a subclass registers it under its namespace and builds its
    dispatch table: every public method is recorded, together with whether
    it carries the Remote marker.

    Attributes
    ----------
    rpc_namespace : str
        Namespace the class is registered under for segmented method names.
        Defaults to the class name; not inherited.
    naming_convention : NamingConvention | str | None
        Overrides the ``NAMING_CONVENTION`` setting.
    strict_resolution : bool | None
        Overrides the ``STRICT_RESOLUTION`` setting.
    codec : XmlRpcCodec | None
        Codec to use instead of the shared one.
    components : dict[type, Any] | None
        Live instances keyed by class, used when a call targets another
        consumer class.
    """

    naming_convention: NamingConvention | str | None = None
    strict_resolution: bool | None = None
    codec: XmlRpcCodec | None = None
    # Default to None to avoid a shared mutable default
    components: dict[type, Any] | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        registry = get_registry()
        registry.register_namespace(cls.get_rpc_namespace(), cls)

        for attr_name, value in list(vars(cls).items()):
            wrapper = wrapper_for_attribute(attr_name, value)
            if wrapper is not None:
                registry.register_method(cls, wrapper.name, wrapper)

    @classmethod
    def get_rpc_namespace(cls) -> str:
        """Namespace this class is registered under."""
        return cls.__dict__.get("rpc_namespace", cls.__name__)

    @classmethod
    def remote_method(
        cls,
        method_name: str | None = None,
        *,
        context: bool | None = None,
    ) -> Callable:
        """A decorator for registering free functions as remote methods.

        Parameters
        ----------
        method_name : str, optional
            XML-RPC method name for the function, by default None.
        context : bool | None, optional
            Force whether the function receives the XmlRpcContext as its first
            argument. Auto-detected when None.

        Returns
        -------
        Callable
            Decorated function.

        Examples
        --------
        ::

            @Api.remote_method()
            def add(ctx: XmlRpcContext, a: int, b: int) -> int:
                return a + b
        """

        def wrap(func: Callable) -> RemoteMethodWrapper:
            wrapper = create_remote_method_wrapper(
                func,
                method_name or func.__name__,
                binding=STATIC_BINDING,
                accepts_context=context,
            )
            get_registry().register_method(cls, wrapper.name, wrapper)
            return wrapper

        return wrap

    @classmethod
    def get_remote_methods(cls) -> list[str]:
        """List the remote-invokable method names of this consumer.

        Examples
        --------
        ::

            class Api(AsyncXmlRpcHttpConsumer):
                @remote()
                def echo(self, *args):
                    return " ".join(args)

                def helper(self):
                    ...

            Api.get_remote_methods()  # ["echo"]
        """
        return get_registry().list_remote_method_names(cls)

    @classmethod
    def get_method_info(cls, method_name: str) -> MethodInfo:
        """Get detailed information about a remote method.

        Raises
        ------
        KeyError
            If no remote method with that name is available.
        """
        registry = get_registry()
        wrapper = registry.resolve(cls, method_name)
        if wrapper is None or not wrapper.remote:
            msg = f"Method '{method_name}' not registered"
            raise KeyError(msg)

        return MethodInfo(
            name=wrapper.name,
            func=wrapper.func,
            signature=str(inspect.signature(wrapper.func)),
            docstring=wrapper.func.__doc__,
            accepts_context=wrapper.accepts_context,
            binding=wrapper.binding,
            reverse=registry.reverse_route(cls, wrapper),
        )

    def get_codec(self) -> XmlRpcCodec:
        """Codec used by this consumer; the shared one unless overridden."""
        return self.codec or get_shared_codec()

    def get_naming_convention(self) -> NamingConvention:
        """Naming convention used by this consumer."""
        return NamingConvention(
            self.naming_convention or get_config().naming_convention
        )

    def is_strict(self) -> bool:
        """Whether resolution failures are reported as faults."""
        if self.strict_resolution is not None:
            return self.strict_resolution
        return get_config().strict_resolution

    def build_context(self, body: bytes, args: list | None = None) -> XmlRpcContext:
        """Create the per-request context for ``body``."""
        return XmlRpcContext(
            consumer=self,
            body=body,
            args=list(args or []),
            components=dict(self.components or {}),
        )

    def xmlrpc(
        self,
        ctx: XmlRpcContext,
        *,
        target_class: type | str | None = None,
        method_name: str | None = None,
    ) -> Any:
        """Dispatch the XML-RPC call in ``ctx.body``.

        Call this from the consumer's entry action. The encoded response is
        written to ``ctx.response``.

        Parameters
        ----------
        ctx : XmlRpcContext
            Request context.
        target_class : type | str, optional
            Class, or namespace of the class, to dispatch to instead of the
            one named by the request (defaults to this consumer's class).
        method_name : str, optional
            Method to dispatch to instead of the requested one.

        Returns
        -------
        Any
            The method's result, a fault, or ``0``.
        """
        codec = self.get_codec()
        try:
            descriptor = self.decode_call(ctx, codec)
        except DecodeError as e:
            logger.debug(logs.INVALID_REQUEST, e)
            self.write_response(ctx, e.as_fault(), codec)
            return 0

        result = self.dispatch_call(
            descriptor, ctx, target_class=target_class, method_name=method_name
        )
        return self.write_response(ctx, result, codec)

    def decode_call(self, ctx: XmlRpcContext, codec: XmlRpcCodec) -> CallDescriptor:
        """Decode the request body after checking size limits.

        Raises
        ------
        DecodeError
            Malformed or oversized request.
        """
        config = get_config()
        if not ctx.body:
            logger.debug(logs.EMPTY_CALL)

        check_body_size(ctx.body, config.limits)
        descriptor = codec.decode(ctx.body, self.get_naming_convention())
        check_method_name_length(descriptor.raw_name, config.limits)

        if config.log_rpc_params:
            logger.debug(
                logs.CALL_INTERCEPTED_WITH_ARGS, descriptor.raw_name, descriptor.args
            )
        else:
            logger.debug(logs.CALL_INTERCEPTED, descriptor.raw_name)
        return descriptor

    def resolve_call(
        self,
        descriptor: CallDescriptor,
        *,
        target_class: type | str | None = None,
        method_name: str | None = None,
    ) -> ResolvedTarget:
        """Look the call up in the registry.

        Raises
        ------
        MethodNotFound
            If the target class or the method does not exist.
        """
        name = method_name or descriptor.method_name
        klass = self._resolve_target_class(descriptor.target_path, target_class)
        if klass is None:
            path = target_class or descriptor.target_path
            raise MethodNotFound(
                f"no consumer registered for {path!r}",
                method_name=join_namespace(path, name),
            )

        method = get_registry().resolve(klass, name)
        if method is None:
            raise MethodNotFound(f"{klass.__name__} has no {name!r}", method_name=name)

        return ResolvedTarget(
            target_class=klass, method=method, is_remote_authorized=method.remote
        )

    def dispatch_call(
        self,
        descriptor: CallDescriptor,
        ctx: XmlRpcContext,
        *,
        target_class: type | str | None = None,
        method_name: str | None = None,
    ) -> Any:
        """Resolve and invoke a decoded call.

        The method runs with a child of ``ctx`` carrying the call arguments;
        ``ctx.args`` is never modified. ``ctx.state`` is set to the result.

        Returns
        -------
        Any
            The method's result, or the neutral ``0`` (a fault in strict
            mode) when the method is missing or not remote-invokable.
        """
        try:
            target = self.resolve_call(
                descriptor, target_class=target_class, method_name=method_name
            )
        except MethodNotFound as e:
            logger.debug(logs.METHOD_NOT_FOUND, e.method_name)
            return self._resolution_failure(e)

        if not target.is_remote_authorized:
            logger.debug(logs.METHOD_NOT_REMOTE, target.method.name)
            return self._resolution_failure(
                NotAuthorized(method_name=target.method.name)
            )

        registry = get_registry()
        instance = self._resolve_instance(target.target_class, ctx)
        child = ctx.with_args(
            descriptor.args,
            method_name=target.method.name,
            reverse=registry.reverse_route(target.target_class, target.method),
        )
        ctx.state = self.execute_action(instance, target.method, child)
        return ctx.state

    def execute_action(
        self, instance: Any, method: RemoteMethodWrapper, ctx: XmlRpcContext
    ) -> Any:
        """Run a resolved method and return the resulting state.

        A :class:`Fault` raised by the method becomes the state. Any other
        error is recorded on ``ctx.errors`` and the state is ``0``.
        """
        logger.debug(logs.RPC_METHOD_CALL_START, ctx.reverse)
        start_time = time.time()
        xmlrpc_method_started.send(
            sender=self.__class__,
            consumer=self,
            method_name=method.name,
            args=ctx.args,
        )

        try:
            result = method.invoke(instance, ctx)
        except Fault as fault:
            logger.debug(
                logs.RPC_METHOD_FAULT, ctx.reverse, fault.faultCode, fault.faultString
            )
            result = fault
        except Exception as e:
            self._handle_invocation_error(e, method, ctx, start_time)
            return 0

        xmlrpc_method_completed.send(
            sender=self.__class__,
            consumer=self,
            method_name=method.name,
            result=result,
            duration=time.time() - start_time,
        )
        logger.debug(logs.RPC_METHOD_CALL_END, ctx.reverse, result)
        return result

    def write_response(
        self, ctx: XmlRpcContext, result: Any, codec: XmlRpcCodec | None = None
    ) -> Any:
        """Encode ``result`` into ``ctx.response``.

        A result the codec cannot marshal is recorded on ``ctx.errors`` and
        replaced by the neutral ``0``.

        Returns
        -------
        Any
            The result, or ``0`` when it could not be encoded.
        """
        codec = codec or self.get_codec()
        try:
            ctx.response.content_type, ctx.response.body = codec.encode(result)
        except (TypeError, OverflowError) as e:
            ctx.errors.append(e)
            logger.error(logs.ENCODE_ERROR, type(result).__name__, e)
            result = 0
            ctx.response.content_type, ctx.response.body = codec.encode(result)
        return result

    def _resolve_target_class(
        self, path: str, target_class: type | str | None
    ) -> type | None:
        """Find the class a call is dispatched to.

        An explicit class wins. A namespace is looked up relative to this
        consumer's namespace first, then as an absolute namespace. Without
        either, the call goes to this consumer's class.
        """
        if isinstance(target_class, type):
            return target_class

        path = target_class or path
        if not path:
            return type(self)

        registry = get_registry()
        for namespace in (join_namespace(self.get_rpc_namespace(), path), path):
            klass = registry.get_class(namespace)
            if klass is not None:
                return klass
        return None

    def _resolve_instance(self, klass: type, ctx: XmlRpcContext) -> Any:
        """Live instance for ``klass``, falling back to the class itself."""
        if klass in ctx.components:
            return ctx.components[klass]
        if isinstance(self, klass):
            return self
        return klass

    def _resolution_failure(self, error: XmlRpcError) -> Any:
        """Result sent when a call cannot be resolved."""
        if self.is_strict():
            return error.as_fault()
        return 0

    def _handle_invocation_error(
        self,
        error: Exception,
        method: RemoteMethodWrapper,
        ctx: XmlRpcContext,
        start_time: float,
    ) -> None:
        """Record and log an error raised by a remote method."""
        ctx.errors.append(error)

        if get_config().sanitize_errors:
            # Production mode: log without stack trace
            logger.error(
                logs.RPC_METHOD_ERROR,
                ctx.reverse,
                f"{type(error).__name__}: {str(error)[:200]}",
            )
        else:
            logger.exception(logs.RPC_METHOD_ERROR, ctx.reverse, error)

        xmlrpc_method_failed.send(
            sender=self.__class__,
            consumer=self,
            method_name=method.name,
            error=error,
            duration=time.time() - start_time,
        )
