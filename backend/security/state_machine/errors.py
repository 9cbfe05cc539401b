from __future__ import annotations

from config.domain_exceptions import ServiceUnavailableError


class CollaboratorUnavailableError(ServiceUnavailableError):
    """
    Raised when the repository or the vision service fails mid-operation.

    The original collaborator exception is chained as `__cause__`.
    """

    def __init__(self, collaborator: str):
        self.collaborator = collaborator
        super().__init__(f"{collaborator} is unavailable.")
