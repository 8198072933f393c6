"""reqparams — validated request parameters for Python web applications.

Parses a query string into a validated parameter set, lets handlers
mutate it, and re-serializes it into a canonical query string.

Basic usage::

    from reqparams import ParameterDefinition, ParameterRegistry, RequestParameters

    registry = ParameterRegistry(
        [
            ParameterDefinition("page"),
            ParameterDefinition("tag", allows_multiple_values=True, max_size=10),
        ],
        page="page",
    )

    params = RequestParameters.from_query_string(registry, "page=gene&tag=a")
    params.add_value("tag", "b")
    params.to_url()  # "page=gene&tag=a&tag=b"

Inside an ASGI app wrapped with ``QueryStringMiddleware``, ``load()``
with no argument reads the current request's query string.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "InvalidFormat",
    "MultipleValuesNotAllowed",
    "NoRequestContext",
    "ParameterDefinition",
    "ParameterError",
    "ParameterRegistry",
    "ParamsConfig",
    "ParamsError",
    "QueryStringMiddleware",
    "RequestParameters",
    "StoreNotLoaded",
    "ValueTooLong",
    "bind_query_string",
    "configure",
    "get_config",
    "get_query_string",
]

_ERRORS = (
    "ConfigurationError",
    "ErrorKind",
    "InvalidFormat",
    "MultipleValuesNotAllowed",
    "NoRequestContext",
    "ParameterError",
    "ParamsError",
    "StoreNotLoaded",
    "ValueTooLong",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import reqparams`` fast while providing a clean top-level API.
    """
    if name == "RequestParameters":
        from reqparams.store import RequestParameters

        return RequestParameters

    if name in ("ParameterDefinition", "ParameterRegistry"):
        from reqparams import registry as _registry

        return getattr(_registry, name)

    if name in ("ParamsConfig", "configure", "get_config"):
        from reqparams import config as _config

        return getattr(_config, name)

    if name in ("bind_query_string", "get_query_string"):
        from reqparams import context as _ctx

        return getattr(_ctx, name)

    if name == "QueryStringMiddleware":
        from reqparams.middleware import QueryStringMiddleware

        return QueryStringMiddleware

    if name in _ERRORS:
        from reqparams import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
