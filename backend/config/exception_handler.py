from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from config.domain_exceptions import NotFoundError, ServiceUnavailableError, ValidationError


def custom_exception_handler(exc, context):
    """
    Central exception->HTTP mapping for domain/use-case exceptions.

    Keep views thin: raise meaningful exceptions and let this layer
    translate them into consistent API responses.
    """

    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, ValidationError):
        return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, NotFoundError):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, ServiceUnavailableError):
        return Response(
            {"detail": str(exc), "collaborator": getattr(exc, "collaborator", None)},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return None
