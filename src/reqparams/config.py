"""Process-wide configuration.

ParamsConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. Stores read the current config once, at
construction, so reconfiguring never changes a store that already exists.
"""

from dataclasses import dataclass, replace
from typing import Any

from reqparams.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ParamsConfig:
    """Parameter handling configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ParamsConfig(encode_url=False, separator="&amp;")
    """

    # Percent-encode values when generating query strings
    encode_url: bool = True

    # Default separator for ``RequestParameters.to_url()``
    separator: str = "&"

    def __post_init__(self) -> None:
        if not self.separator:
            msg = "ParamsConfig.separator must not be empty"
            raise ConfigurationError(msg)


_current = ParamsConfig()


def get_config() -> ParamsConfig:
    """Return the process-wide configuration."""
    return _current


def configure(config: ParamsConfig | None = None, **overrides: Any) -> ParamsConfig:
    """Install a new process-wide configuration and return it.

    Either pass a complete ``ParamsConfig``, or keyword overrides applied on
    top of the current one::

        configure(encode_url=False)

    Meant to be called once at startup, before any store is created.
    """
    global _current
    if config is None:
        config = replace(_current, **overrides)
    elif overrides:
        config = replace(config, **overrides)
    _current = config
    return config
