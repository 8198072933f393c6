"""Validation result — immutable container for secured values or errors."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of checking raw values against a parameter registry.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validate(query_string, registry)
        if not result:
            return render_errors(result.errors)

    ``data`` contains the secured (trimmed) values of every parameter that
    passed, as a string for a single occurrence or a list for repeats.

    ``errors`` maps parameter names to lists of error messages::

        {"tag": ["Must be at most 10 characters"],
         "page": ["Parameter does not accept multiple values"]}
    """

    data: dict[str, str | list[str]]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
