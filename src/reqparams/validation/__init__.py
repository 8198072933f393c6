"""Validation gate — every value passes through ``secure()`` before it is stored.

Usage::

    from reqparams.validation import secure, validate

    cleaned = secure(raw, definition)   # raises ValueTooLong / InvalidFormat

    result = validate("page=gene&tag=a", registry)
    if not result:
        # result.errors == {"tag": ["Must be at most 10 characters"]}
        ...
"""

from collections.abc import Mapping

from reqparams.errors import InvalidFormat, MultipleValuesNotAllowed, ParameterError, ValueTooLong
from reqparams.http.query import parse_query
from reqparams.registry import ParameterDefinition, ParameterRegistry
from reqparams.validation.result import ValidationResult
from reqparams.validation.rules import Validator, matches, max_length
from reqparams.values import Multiple, ParameterValue, Scalar, as_list

__all__ = [
    "ValidationResult",
    "Validator",
    "matches",
    "max_length",
    "secure",
    "validate",
]


def secure(raw: str | None, definition: ParameterDefinition) -> str:
    """Check *raw* against *definition* and return it trimmed.

    ``None`` becomes ``""``. Length and format are checked on the
    untrimmed value:

    - ``max_size > 0`` and the value is longer → ``ValueTooLong``
    - ``format`` set and the value does not match → ``InvalidFormat``
    """
    if raw is None:
        return ""

    if definition.max_size > 0:
        message = max_length(definition.max_size)(raw)
        if message is not None:
            raise ValueTooLong(definition.name, message)

    if definition.pattern is not None:
        message = matches(definition.pattern)(raw)
        if message is not None:
            raise InvalidFormat(definition.name, message)

    return raw.strip()


def validate(
    query: str | Mapping[str, str | list[str]],
    registry: ParameterRegistry,
) -> ValidationResult:
    """Check raw values against a registry without raising.

    Args:
        query: A raw query string (parsed like ``RequestParameters.load()``),
            or a mapping of parameter names to one value or a list of values.
            A one-item list counts as a single value.
        registry: The parameter definitions to check against. Keys that are
            not registered are ignored.

    Returns:
        A ``ValidationResult`` with ``.data`` (secured values) and
        ``.errors`` (name → list of error messages).
    """
    if isinstance(query, str):
        parsed = parse_query(query)
    else:
        parsed = {name: _coerce(value) for name, value in query.items()}

    errors: dict[str, list[str]] = {}
    cleaned: dict[str, str | list[str]] = {}

    for definition in registry:
        matched = parsed.get(definition.name)
        if matched is None:
            continue

        try:
            if isinstance(matched, Multiple) and not definition.allows_multiple_values:
                raise MultipleValuesNotAllowed(definition.name)
            secured = [secure(v, definition) for v in as_list(matched)]
        except ParameterError as exc:
            errors.setdefault(definition.name, []).append(exc.detail)
            continue

        cleaned[definition.name] = secured if isinstance(matched, Multiple) else secured[0]

    return ValidationResult(data=cleaned, errors=errors)


def _coerce(value: str | list[str]) -> ParameterValue:
    if isinstance(value, str):
        return Scalar(value)
    if len(value) == 1:
        return Scalar(value[0])
    return Multiple(tuple(value))
