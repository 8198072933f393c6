"""Parameter registry — ordered catalog of parameter definitions.

Mirrors a compiled route table: ``ParameterDefinition`` is the frozen
definition, ``ParameterRegistry`` is the immutable lookup table built once
at startup.

The catalog order is canonical: generated query strings list parameters
in registry order, not in the order they were set or received.

Free-threading safety:
    - ParameterDefinition is a frozen dataclass (immutable)
    - ParameterRegistry._definitions is a tuple built at construction, never mutated
    - ParameterRegistry._by_name is a dict built at construction, never mutated
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from reqparams.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ParameterDefinition:
    """A frozen parameter definition.

    Attributes:
        name: The query-string key.
        allows_multiple_values: Whether the key may repeat.
        is_storable: Whether the value participates in the derived key.
            Adding a value to a storable parameter clears the registry's
            key parameter in the same store.
        max_size: Maximum value length. ``0`` means unbounded.
        format: Regular expression a value must match (searched, not
            anchored — anchor it with ``^...$`` to require a full match).
    """

    name: str
    allows_multiple_values: bool = False
    is_storable: bool = False
    max_size: int = 0
    format: str | re.Pattern[str] | None = None
    pattern: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            msg = "Parameter name must not be empty"
            raise ConfigurationError(msg)
        if self.max_size < 0:
            msg = f"Parameter {self.name!r}: max_size must be >= 0, got {self.max_size}"
            raise ConfigurationError(msg)

        compiled: re.Pattern[str] | None = None
        if isinstance(self.format, re.Pattern):
            compiled = self.format
        elif self.format is not None:
            try:
                compiled = re.compile(self.format)
            except re.error as exc:
                msg = f"Parameter {self.name!r}: invalid format {self.format!r}: {exc}"
                raise ConfigurationError(msg) from exc
        object.__setattr__(self, "pattern", compiled)


class ParameterRegistry:
    """Ordered, immutable catalog of parameter definitions.

    Besides the catalog, the registry names a few distinguished parameters:

    - ``key``: the derived-key slot, cleared whenever a storable parameter
      receives a value.
    - ``action``, ``page``, ``display_type``: read by request-dispatch code
      through ``RequestParameters.get_first_value()``.

    Every distinguished name must belong to the catalog.
    """

    __slots__ = ("_by_name", "_definitions", "_key", "_action", "_page", "_display_type")

    def __init__(
        self,
        definitions: Iterable[ParameterDefinition],
        *,
        key: str | None = None,
        action: str | None = None,
        page: str | None = None,
        display_type: str | None = None,
    ) -> None:
        ordered = tuple(definitions)
        by_name: dict[str, ParameterDefinition] = {}
        for definition in ordered:
            if definition.name in by_name:
                msg = f"Duplicate parameter name: {definition.name!r}"
                raise ConfigurationError(msg)
            by_name[definition.name] = definition

        self._definitions = ordered
        self._by_name = by_name
        self._key = self._distinguished("key", key)
        self._action = self._distinguished("action", action)
        self._page = self._distinguished("page", page)
        self._display_type = self._distinguished("display_type", display_type)

    def _distinguished(self, role: str, name: str | None) -> ParameterDefinition | None:
        if name is None:
            return None
        definition = self._by_name.get(name)
        if definition is None:
            msg = f"The {role} parameter {name!r} is not in the registry"
            raise ConfigurationError(msg)
        return definition

    @property
    def key_parameter(self) -> ParameterDefinition | None:
        """The derived-key parameter, if the registry has one."""
        return self._key

    @property
    def action_parameter(self) -> ParameterDefinition | None:
        return self._action

    @property
    def page_parameter(self) -> ParameterDefinition | None:
        return self._page

    @property
    def display_type_parameter(self) -> ParameterDefinition | None:
        return self._display_type

    def get(self, name: str) -> ParameterDefinition | None:
        """Look up a definition by name. Returns ``None`` if not found."""
        return self._by_name.get(name)

    def resolve(self, parameter: ParameterDefinition | str) -> ParameterDefinition:
        """Return the registered definition for a definition or a name.

        Raises ``KeyError`` if the parameter is not registered.
        """
        name = parameter if isinstance(parameter, str) else parameter.name
        definition = self._by_name.get(name)
        if definition is None:
            msg = f"Parameter not found: {name!r}"
            raise KeyError(msg)
        return definition

    def storable(self) -> Iterator[ParameterDefinition]:
        """Storable definitions, in catalog order."""
        return (d for d in self._definitions if d.is_storable)

    def __getitem__(self, name: str) -> ParameterDefinition:
        return self.resolve(name)

    def __iter__(self) -> Iterator[ParameterDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, ParameterDefinition):
            name = name.name
        return name in self._by_name

    def __repr__(self) -> str:
        names = ", ".join(d.name for d in self._definitions)
        return f"ParameterRegistry([{names}])"
