from __future__ import annotations

from .errors import CollaboratorUnavailableError
from .listeners import StatusListener
from .service import SecurityService
from .transitions import CAT_CONFIDENCE_THRESHOLD

__all__ = [
    "CAT_CONFIDENCE_THRESHOLD",
    "CollaboratorUnavailableError",
    "SecurityService",
    "StatusListener",
]
