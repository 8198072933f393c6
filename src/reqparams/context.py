"""Request-scoped query string via ContextVar.

Provides:
- ``query_string_var``: The raw query string of the current request.
- ``bind_query_string``: Set it for the duration of a ``with`` block.

``QueryStringMiddleware`` binds it for every HTTP request. It is
explicitly opt-in — if nothing binds it, ``get_query_string()`` raises
``NoRequestContext`` and ``RequestParameters.load()`` requires an
explicit string.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. No locks needed.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from reqparams.errors import NoRequestContext

query_string_var: ContextVar[str] = ContextVar("reqparams_query_string")
"""The current request's query string, without the leading ``?``."""


def get_query_string() -> str:
    """Return the current request's query string.

    Raises ``NoRequestContext`` if called outside a request context.
    """
    try:
        return query_string_var.get()
    except LookupError:
        msg = "No request is bound; pass the query string to load() explicitly"
        raise NoRequestContext(msg) from None


@contextmanager
def bind_query_string(query_string: str) -> Iterator[str]:
    """Make *query_string* the current request's query string.

    Usage::

        with bind_query_string("page=gene&tag=a"):
            params = RequestParameters(registry).load()
    """
    token = query_string_var.set(query_string.removeprefix("?"))
    try:
        yield query_string
    finally:
        query_string_var.reset(token)
