from __future__ import annotations

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework.authtoken.models import Token

logger = logging.getLogger(__name__)

TOKEN_KEYWORD = b"token"


def token_from_scope(scope) -> str | None:
    """
    Return the DRF token key carried by a websocket handshake, if any.

    Browsers cannot set headers on a websocket, so `?token=<key>` is accepted
    alongside `Authorization: Token <key>`; the header wins when both exist.
    """

    for name, value in scope.get("headers") or ():
        if name.lower() != b"authorization":
            continue
        keyword, _, key = value.partition(b" ")
        if keyword.lower() == TOKEN_KEYWORD and key.strip():
            return key.strip().decode("latin-1")

    query_string = (scope.get("query_string") or b"").decode("utf-8")
    return parse_qs(query_string).get("token", [None])[0] or None


@database_sync_to_async
def _get_user_for_token(token_key: str):
    try:
        token = Token.objects.select_related("user").get(key=token_key)
    except Token.DoesNotExist:
        return AnonymousUser()
    if not token.user.is_active:
        return AnonymousUser()
    return token.user


class TokenAuthMiddleware(BaseMiddleware):
    """
    Resolve `scope["user"]` for `/ws/security/` from a DRF token.

    Runs inside `AuthMiddlewareStack`; a user already authenticated by the
    session is left alone.
    """

    async def __call__(self, scope, receive, send):
        user = scope.get("user")
        if user is not None and getattr(user, "is_authenticated", False):
            return await super().__call__(scope, receive, send)

        token_key = token_from_scope(scope)
        if token_key:
            scope["user"] = await _get_user_for_token(token_key)
            if scope["user"].is_anonymous:
                logger.info("WS auth: rejected token for %s", scope.get("path"))
            else:
                logger.debug("WS auth: user_id=%s via token", scope["user"].id)
        return await super().__call__(scope, receive, send)
