from django.urls import path
from .consumers import PeerRelayConsumer

websocket_urlpatterns = [
    path('api/ws', PeerRelayConsumer.as_asgi()),
]
