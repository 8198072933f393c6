"""Parameter values — a tagged union of one string or an ordered sequence.

A parameter slot holds either a ``Scalar`` or a ``Multiple``, never a mix.
Accessors match on the tag instead of probing the runtime shape::

    match value:
        case Scalar(value=v):
            ...
        case Multiple(values=vs):
            ...
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Scalar:
    """A single string value."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            msg = f"Scalar value must be a str, got {type(self.value).__name__}"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Multiple:
    """An ordered sequence of string values."""

    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.values, str):
            msg = "Multiple values must be a sequence of str, not a str"
            raise TypeError(msg)
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))
        for item in self.values:
            if not isinstance(item, str):
                msg = f"Multiple values must be str, got {type(item).__name__}"
                raise TypeError(msg)

    def append(self, value: str) -> "Multiple":
        """Return a new ``Multiple`` with *value* added at the end."""
        return Multiple((*self.values, value))


type ParameterValue = Scalar | Multiple


def as_list(value: ParameterValue | None) -> list[str]:
    """All strings held by *value*, in order. Empty when absent."""
    match value:
        case None:
            return []
        case Scalar(value=v):
            return [v]
        case Multiple(values=vs):
            return list(vs)
    msg = f"Not a parameter value: {value!r}"
    raise TypeError(msg)


def first(value: ParameterValue | None) -> str | None:
    """The scalar, or the first element of a sequence, or ``None``."""
    match value:
        case None:
            return None
        case Scalar(value=v):
            return v
        case Multiple(values=vs):
            return vs[0] if vs else None
    msg = f"Not a parameter value: {value!r}"
    raise TypeError(msg)


def to_python(value: ParameterValue | None) -> str | list[str] | None:
    """Plain Python shape: ``str`` for a scalar, ``list`` for a sequence."""
    match value:
        case None:
            return None
        case Scalar(value=v):
            return v
        case Multiple(values=vs):
            return list(vs)
    msg = f"Not a parameter value: {value!r}"
    raise TypeError(msg)
