"""reqparams exception hierarchy.

Shared across the codec, the validation gate, the registry and the store
so every module raises and catches the same types.
"""

from dataclasses import dataclass
from enum import StrEnum


class ParamsError(Exception):
    """Base for all reqparams-specific errors."""


class ConfigurationError(ParamsError):
    """Raised when a definition, registry, or config is invalid.

    Typically surfaces at startup, when the registry is built.
    """


class StoreNotLoaded(ParamsError):
    """A store was read or written before ``load()`` succeeded."""


class NoRequestContext(ParamsError, LookupError):
    """``load()`` was asked for the current request's query string,
    but no request is bound to this task/thread.
    """


class ErrorKind(StrEnum):
    """Closed set of reasons a parameter value can be rejected."""

    VALUE_TOO_LONG = "value_too_long"
    INVALID_FORMAT = "invalid_format"
    MULTIPLE_VALUES_NOT_ALLOWED = "multiple_values_not_allowed"


@dataclass(frozen=True, slots=True)
class ParameterError(ParamsError):
    """A value was rejected for a known parameter.

    Raised synchronously by ``RequestParameters.load()`` and
    ``RequestParameters.add_value()``. These are caller errors: bad input
    or misuse, never transient.
    """

    parameter: str
    kind: ErrorKind
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.parameter}: {self.detail}"
        return f"{self.parameter}: {self.kind}"


class ValueTooLong(ParameterError):  # noqa: N818
    """Value is longer than the parameter's ``max_size``."""

    def __init__(self, parameter: str, detail: str = "") -> None:
        super().__init__(
            parameter=parameter,
            kind=ErrorKind.VALUE_TOO_LONG,
            detail=detail or "Value is too long",
        )


class InvalidFormat(ParameterError):  # noqa: N818
    """Value does not match the parameter's ``format`` pattern."""

    def __init__(self, parameter: str, detail: str = "") -> None:
        super().__init__(
            parameter=parameter,
            kind=ErrorKind.INVALID_FORMAT,
            detail=detail or "Value does not match the required format",
        )


class MultipleValuesNotAllowed(ParameterError):  # noqa: N818
    """A second value was given for a single-valued parameter."""

    def __init__(self, parameter: str, detail: str = "") -> None:
        super().__init__(
            parameter=parameter,
            kind=ErrorKind.MULTIPLE_VALUES_NOT_ALLOWED,
            detail=detail or "Parameter does not accept multiple values",
        )
