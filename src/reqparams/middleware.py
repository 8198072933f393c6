"""ASGI middleware that binds the request's query string.

Wrap any ASGI application::

    app = QueryStringMiddleware(app)

Inside the wrapped app, ``RequestParameters(registry).load()`` reads the
query string of the request being served.
"""

import logging

from reqparams._asgi import ASGIApp, Receive, Scope, Send
from reqparams.context import bind_query_string

logger = logging.getLogger("reqparams.middleware")

_BOUND_SCOPES = frozenset({"http", "websocket"})


class QueryStringMiddleware:
    """Bind ``scope["query_string"]`` for the duration of each request.

    The query string is decoded as latin-1, the encoding ASGI servers
    use for raw query bytes. Scope types other than ``http`` and
    ``websocket`` (e.g. ``lifespan``) pass straight through.
    """

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in _BOUND_SCOPES:
            await self.app(scope, receive, send)
            return

        raw: bytes = scope.get("query_string", b"")
        query_string = raw.decode("latin-1")
        logger.debug("Binding query string for %s %s", scope["type"], scope.get("path", ""))
        with bind_query_string(query_string):
            await self.app(scope, receive, send)
