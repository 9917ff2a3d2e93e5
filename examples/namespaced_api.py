# ruff: noqa
"""Example of a segmented XML-RPC API spread over several classes.

A call to ``Shop.Cart.add`` reaches ``CartApi.add``: under the segmented
naming convention the dotted prefix names a registered namespace, looked up
below the entry consumer's own namespace first.

Client side::

    import xmlrpc.client

    proxy = xmlrpc.client.ServerProxy("http://localhost:8000/rpc/")
    proxy.Cart.add("sku-1", 2)      # -> 2
    proxy.Cart.total()              # -> 2
    proxy.status()                  # -> "ok"
    proxy.Cart.reset()              # -> 0, not remote-invokable
"""

from __future__ import annotations

import logging

from channels_xmlrpc import AsyncXmlRpcHttpConsumer, XmlRpcContext, remote
from channels_xmlrpc.signals import xmlrpc_method_completed, xmlrpc_method_failed
from channels_xmlrpc.xmlrpc_base import XmlRpcBase

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Components
# ------------------------------------------------------------------------------
class CartApi(XmlRpcBase):
    """Shopping cart operations, registered as ``Shop::Cart``."""

    rpc_namespace = "Shop::Cart"

    def __init__(self):
        self.items: dict[str, int] = {}

    @remote()
    def add(self, sku: str, quantity: int) -> int:
        self.items[sku] = self.items.get(sku, 0) + quantity
        return self.items[sku]

    @remote()
    def total(self) -> int:
        return sum(self.items.values())

    def reset(self) -> None:
        self.items.clear()


# ------------------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------------------
CART = CartApi()


class ShopConsumer(AsyncXmlRpcHttpConsumer):
    """Receives every call and dispatches it to the right component."""

    rpc_namespace = "Shop"
    naming_convention = "segmented"
    components = {CartApi: CART}

    @remote()
    def status(self, ctx: XmlRpcContext) -> str:
        logger.info("status requested via %s", ctx.reverse)
        return "ok"


# ------------------------------------------------------------------------------
# Monitoring
# ------------------------------------------------------------------------------
def log_slow_calls(sender, method_name, duration, **kwargs):
    if duration > 1.0:
        logger.warning("Slow XML-RPC call %s: %.2fs", method_name, duration)


def log_failures(sender, method_name, error, **kwargs):
    logger.error("XML-RPC call %s failed: %s", method_name, error)


xmlrpc_method_completed.connect(log_slow_calls)
xmlrpc_method_failed.connect(log_failures)
