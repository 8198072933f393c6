"""Query string codec.

``parse_query`` turns a raw ``key=value&key=value`` string into parameter
values; ``build_query`` turns stored values back into a canonical query
string, in registry order.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote

from reqparams.values import Multiple, ParameterValue, Scalar, as_list

if TYPE_CHECKING:
    from reqparams.registry import ParameterRegistry

# Characters left as-is when encoding, same set as JavaScript's encodeURIComponent
_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode *value* for use inside a query string."""
    return quote(value, safe=_SAFE)


def decode_component(value: str) -> str:
    """Decode a query-string value: ``+`` means space, then percent-decode."""
    return unquote(value.replace("+", " "))


def parse_query(raw: str, decode: bool = True) -> dict[str, ParameterValue]:
    """Parse *raw* into ``name -> Scalar | Multiple``.

    Segments that do not contain exactly one ``=`` are dropped, as are
    empty values. Keys are taken verbatim. A repeated key accumulates
    its values in order of appearance.
    """
    parsed: dict[str, ParameterValue] = {}
    for segment in raw.split("&"):
        parts = segment.split("=")
        if len(parts) != 2:
            continue
        key, value = parts
        if decode:
            value = decode_component(value)
        if value == "":
            continue

        match parsed.get(key):
            case None:
                parsed[key] = Scalar(value)
            case Scalar(value=previous):
                parsed[key] = Multiple((previous, value))
            case Multiple() as existing:
                parsed[key] = existing.append(value)
    return parsed


def build_query(
    values: Mapping[str, ParameterValue | None],
    registry: "ParameterRegistry",
    *,
    separator: str = "&",
    encode: bool = True,
) -> str:
    """Build a query string from *values*, in registry order.

    Each value is emitted as ``name=value`` followed by *separator*; when
    *encode* is true the value is percent-encoded. The separator and the
    names are emitted verbatim so the result parses back with
    ``parse_query``. Exactly one trailing separator is removed. Names not
    in the registry are ignored, and so are empty values, which
    ``parse_query`` would drop anyway.
    """
    parts: list[str] = []
    for definition in registry:
        for value in as_list(values.get(definition.name)):
            if not value:
                continue
            if encode:
                value = encode_component(value)
            parts.append(f"{definition.name}={value}{separator}")

    fragment = "".join(parts)
    if fragment:
        fragment = fragment[: len(fragment) - len(separator)]
    return fragment

