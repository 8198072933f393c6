"""Request parameters — the per-request store of validated values.

One ``RequestParameters`` per inbound request::

    params = RequestParameters.from_query_string(registry, "page=gene&tag=a")
    params.get_first_value("page")          # "gene"
    params.add_value("tag", "b")            # secured, multiplicity-checked
    params.to_url()                         # "page=gene&tag=a&tag=b"

Every value enters through ``reqparams.validation.secure()``; there is no
path that stores an unchecked value.

Value shapes:
    ``load()`` stores a single occurrence as a ``Scalar`` and repeats as a
    ``Multiple``. ``add_value()`` always stores a ``Multiple``, even of
    length one. Readers are shape-agnostic: ``get_first_value()`` and
    ``get_list()`` accept both, and ``get_values()`` reports the stored
    shape as ``str`` or ``list``.

Lifecycle:
    A store is *uninitialized* until ``load()`` succeeds, then *ready*.
    Every other operation requires *ready* and raises ``StoreNotLoaded``
    otherwise. A store is never shared between requests.
"""

import logging
from typing import Self

from reqparams.config import ParamsConfig, get_config
from reqparams.context import get_query_string
from reqparams.errors import MultipleValuesNotAllowed, StoreNotLoaded
from reqparams.http.query import build_query, parse_query
from reqparams.registry import ParameterDefinition, ParameterRegistry
from reqparams.validation import secure
from reqparams.values import Multiple, ParameterValue, Scalar, as_list, first, to_python

logger = logging.getLogger("reqparams.store")

type ParameterRef = ParameterDefinition | str


class RequestParameters:
    """Validated parameter values for one request.

    Attributes:
        registry: The parameter catalog. Read-only, shared by all stores.
        encode_url: Whether ``to_url()`` percent-encodes values. Read
            from the process-wide config at construction and fixed for
            the lifetime of the store.
    """

    __slots__ = ("_loaded", "_separator", "_values", "encode_url", "registry")

    def __init__(
        self,
        registry: ParameterRegistry,
        *,
        config: ParamsConfig | None = None,
    ) -> None:
        config = config or get_config()
        self.registry = registry
        self.encode_url = config.encode_url
        self._separator = config.separator
        self._values: dict[str, ParameterValue | None] = {}
        self._loaded = False

    @classmethod
    def from_query_string(
        cls,
        registry: ParameterRegistry,
        query_string: str,
        *,
        config: ParamsConfig | None = None,
    ) -> Self:
        """Create a store and load it from *query_string*."""
        return cls(registry, config=config).load(query_string)

    @property
    def is_loaded(self) -> bool:
        """True once ``load()`` has succeeded."""
        return self._loaded

    # -- Loading --

    def load(self, query_string: str | None = None) -> Self:
        """Load values from *query_string*, replacing any current values.

        ``None`` reads the current request's query string (see
        ``reqparams.context``); outside a request this raises
        ``NoRequestContext``. Pass ``""`` for an empty store.

        Raises ``MultipleValuesNotAllowed`` when a single-valued parameter
        is repeated, and ``ValueTooLong`` / ``InvalidFormat`` when a value
        fails its definition. On failure the previous values are kept.
        """
        if query_string is None:
            query_string = get_query_string()

        matched = parse_query(query_string, decode=True)
        loaded: dict[str, ParameterValue | None] = {}

        for definition in self.registry:
            match matched.get(definition.name):
                case None:
                    continue
                case Scalar(value=raw):
                    loaded[definition.name] = Scalar(secure(raw, definition))
                case Multiple(values=raws):
                    if not definition.allows_multiple_values:
                        raise MultipleValuesNotAllowed(definition.name)
                    loaded[definition.name] = Multiple(
                        tuple(secure(raw, definition) for raw in raws)
                    )

        self._values = loaded
        self._loaded = True
        logger.debug("Loaded %d of %d parameter(s)", len(loaded), len(self.registry))
        return self

    # -- Reading --

    def get_values(self, parameter: ParameterRef) -> str | list[str] | None:
        """Return the stored value as stored: ``str``, ``list``, or ``None``."""
        return to_python(self._get(parameter))

    def get_first_value(self, parameter: ParameterRef) -> str | None:
        """Return the single value, or the first of several, or ``None``."""
        return first(self._get(parameter))

    def get_list(self, parameter: ParameterRef) -> list[str]:
        """Return all values as a list. Empty when absent."""
        return as_list(self._get(parameter))

    def _get(self, parameter: ParameterRef) -> ParameterValue | None:
        self._require_loaded()
        definition = self.registry.resolve(parameter)
        return self._values.get(definition.name)

    # -- Writing --

    def add_value(self, parameter: ParameterRef, value: str | None) -> None:
        """Secure *value* and append it to the parameter's values.

        Raises ``MultipleValuesNotAllowed`` if the parameter is
        single-valued and already holds a value. ``None`` appends nothing,
        so the parameter's values are left as they were. Adding to a
        storable parameter, ``None`` included, resets the registry's key
        parameter.
        """
        self._require_loaded()
        definition = self.registry.resolve(parameter)

        if value is not None:
            secured = secure(value, definition)
            match self._values.get(definition.name):
                case None:
                    updated = Multiple((secured,))
                case _ if not definition.allows_multiple_values:
                    raise MultipleValuesNotAllowed(definition.name)
                case Scalar(value=existing):
                    updated = Multiple((existing, secured))
                case Multiple() as existing:
                    updated = existing.append(secured)
            self._values[definition.name] = updated

        if definition.is_storable:
            self._reset_key(definition)

    def _reset_key(self, changed: ParameterDefinition) -> None:
        key = self.registry.key_parameter
        if key is None or key.name == changed.name:
            return
        if self._values.get(key.name) is not None:
            logger.debug("Storable parameter %r changed, resetting %r", changed.name, key.name)
        self._values[key.name] = None

    def reset_values(self, parameter: ParameterRef) -> None:
        """Clear the parameter's value. Later reads return ``None``."""
        self._require_loaded()
        definition = self.registry.resolve(parameter)
        self._values[definition.name] = None

    # -- Output --

    def to_url(self, separator: str | None = None) -> str:
        """Build the query string for the current values, in registry order.

        *separator* defaults to the configured separator. Values are
        percent-encoded when ``encode_url`` is true. Empty values, such as
        one that trimmed to nothing, are left out of the result.
        """
        self._require_loaded()
        return build_query(
            self._values,
            self.registry,
            separator=self._separator if separator is None else separator,
            encode=self.encode_url,
        )

    # -- Cloning --

    def clone_with_all_parameters(self) -> "RequestParameters":
        """Return a new loaded store holding the same values."""
        self._require_loaded()
        return self._clone(dict(self._values))

    def clone_with_storable_parameters(self) -> "RequestParameters":
        """Return a new loaded store holding only storable parameters.

        The key parameter's current value is carried over too, so the
        clone still refers to the same derived key.
        """
        self._require_loaded()
        kept = {
            d.name: self._values[d.name]
            for d in self.registry.storable()
            if self._values.get(d.name) is not None
        }
        key = self.registry.key_parameter
        if key is not None and self._values.get(key.name) is not None:
            kept[key.name] = self._values[key.name]
        return self._clone(kept)

    def _clone(self, values: dict[str, ParameterValue | None]) -> "RequestParameters":
        clone = RequestParameters(
            self.registry,
            config=ParamsConfig(encode_url=self.encode_url, separator=self._separator),
        )
        clone._values = values
        clone._loaded = True
        return clone

    # -- Internals --

    def _require_loaded(self) -> None:
        if not self._loaded:
            msg = "RequestParameters used before load(); call load() first"
            raise StoreNotLoaded(msg)

    def __repr__(self) -> str:
        if not self._loaded:
            return "RequestParameters(<not loaded>)"
        items = ", ".join(
            f"{name!r}: {to_python(value)!r}"
            for name, value in self._values.items()
            if value is not None
        )
        return f"RequestParameters({{{items}}})"
