"""HTTP entry point for XML-RPC consumers."""

from __future__ import annotations

from typing import Any

from asgiref.sync import sync_to_async
from channels.generic.http import AsyncHttpConsumer

from channels_xmlrpc.context import XmlRpcContext
from channels_xmlrpc.xmlrpc_base import XmlRpcBase


class AsyncXmlRpcHttpConsumer(AsyncHttpConsumer, XmlRpcBase):
    """Accepts XML-RPC calls over HTTP POST.

    Remote methods are defined on subclasses and run synchronously in a
    worker thread. Override :meth:`entrypoint` to dispatch to another class
    or method.

    Examples
    --------
    ::

        class Api(AsyncXmlRpcHttpConsumer):
            @remote()
            def echo(self, *args):
                return " ".join(args)

        application = URLRouter([path("rpc/", Api.as_asgi())])
    """

    async def handle(self, body: bytes) -> None:
        """
        Called on HTTP request
        :param body: request body
        :return:
        """
        if self.scope.get("method") != "POST":
            await self.send_response(405, b"", headers=[(b"Allow", b"POST")])
            return

        ctx = self.build_context(body)
        await sync_to_async(self.entrypoint)(ctx)

        await self.send_response(
            ctx.response.status,
            ctx.response.body,
            headers=[
                (b"Content-Type", ctx.response.content_type.encode("ascii")),
            ],
        )

    def entrypoint(self, ctx: XmlRpcContext) -> Any:
        """Public action redispatching the request as an XML-RPC call."""
        return self.xmlrpc(ctx)
