from __future__ import annotations

from django.urls import re_path

from .consumers import SecurityConsumer

websocket_urlpatterns = [
    re_path(r"^ws/security/$", SecurityConsumer.as_asgi()),
]
