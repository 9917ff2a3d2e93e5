# import the logging library
import logging

from channels_xmlrpc import AsyncXmlRpcHttpConsumer, XmlRpcContext, remote

# Get an instance of a logger
logger = logging.getLogger(__name__)


class MyXmlRpcConsumer(AsyncXmlRpcHttpConsumer):
    @remote()
    def ping(self, fake_an_error=False):
        if fake_an_error:
            # Logged and answered with the neutral result
            #  --> <methodCall><methodName>ping</methodName>...<boolean>1</boolean>...
            #  <-- <methodResponse><params><param><value><int>0</int>...
            raise Exception("fake_error")
        # Will return a result to the client
        #  --> <methodCall><methodName>ping</methodName></methodCall>
        #  <-- <methodResponse><params><param><value><string>pong</string>...
        return "pong"

    @remote()
    def whoami(self, ctx: XmlRpcContext):
        """Return the client address of the caller."""
        client = ctx.scope.get("client") or ("unknown", 0)
        logger.info("%s called by %s", ctx.reverse, client[0])
        return client[0]

    def cleanup(self):
        # Public but not remote: calls to "cleanup" get the neutral result
        logger.info("cleanup")


class StrictXmlRpcConsumer(MyXmlRpcConsumer):
    # Unknown methods get Fault(-32601, "Method not found") instead of 0
    strict_resolution = True
