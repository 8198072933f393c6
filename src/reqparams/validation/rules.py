"""Built-in validation rules for parameter values.

Each validator is a callable with the signature::

    def rule(value: str) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized validators are factory functions that return a validator::

    def max_length(n: int) -> Callable[[str], str | None]:
        def check(value: str) -> str | None:
            if len(value) > n:
                return f"Must be at most {n} characters"
            return None
        return check

``secure()`` builds its checks from these rules and turns their messages
into typed errors.
"""

import re
from collections.abc import Callable

# Type alias for a validator function
type Validator = Callable[[str], str | None]


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """String must be at most *n* characters."""

    def check(value: str) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def matches(pattern: str | re.Pattern[str], message: str | None = None) -> Validator:
    """Value must contain a match for the given regex pattern.

    The pattern is searched, not anchored; use ``^`` and ``$`` to require
    a full match.
    """
    compiled = re.compile(pattern)

    def check(value: str) -> str | None:
        if not compiled.search(value):
            return message or f"Must match pattern: {compiled.pattern}"
        return None

    return check
