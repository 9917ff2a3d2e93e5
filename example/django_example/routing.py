from channels.routing import ProtocolTypeRouter, URLRouter
from django.urls import re_path

from example.django_example.consumer import MyXmlRpcConsumer, StrictXmlRpcConsumer

http_urlpatterns = [
    re_path(r"^strict/$", StrictXmlRpcConsumer.as_asgi()),
    re_path(r"^RPC2$", MyXmlRpcConsumer.as_asgi()),
]

application = ProtocolTypeRouter(
    {
        "http": URLRouter(http_urlpatterns),
    }
)
