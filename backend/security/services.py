from __future__ import annotations

"""
Process-wide wiring of the security controller.

Views, tasks and management commands go through `get_security_service()` so
they share one controller (and therefore one lock and one listener list).
"""

import threading

from security.gateways.vision import load_vision_service
from security.listeners import ChannelLayerStatusListener, EventLogStatusListener
from security.repositories import DjangoSecurityRepository
from security.state_machine import SecurityService

_service: SecurityService | None = None
_service_lock = threading.Lock()


def build_security_service() -> SecurityService:
    return SecurityService(
        repository=DjangoSecurityRepository(),
        vision_service=load_vision_service(),
        listeners=[EventLogStatusListener(), ChannelLayerStatusListener()],
    )


def get_security_service() -> SecurityService:
    global _service
    with _service_lock:
        if _service is None:
            _service = build_security_service()
        return _service


def reset_security_service() -> None:
    global _service
    with _service_lock:
        _service = None
