"""
Fluxivity Configuration
=======================

Process-wide defaults, held in a single module-level ``FluxivityConfig``.

Usage:
    ```python
    import logging
    from fluxivity import configure, get_config

    configure(default_cache_size=16, log_level=logging.INFO)
    assert get_config().default_cache_size == 16
    ```
"""

import logging
from dataclasses import dataclass, fields, replace


@dataclass
class FluxivityConfig:
    """Library defaults."""

    default_cache_size: int = 1
    """Capacity ``memoize()`` uses when no ``cache_size`` is given."""

    log_level: int = logging.DEBUG
    """Level ``LoggingMiddleware`` logs updates at when none is given."""


_CONFIG = FluxivityConfig()


def get_config() -> FluxivityConfig:
    """Return the active configuration."""
    return _CONFIG


def configure(**options) -> FluxivityConfig:
    """
    Apply ``options`` on top of the active configuration.

    Raises:
        TypeError: If an option name is unknown.
        ValueError: If ``default_cache_size`` is less than 1.
    """
    global _CONFIG

    known = {f.name for f in fields(FluxivityConfig)}
    unknown = set(options) - known
    if unknown:
        raise TypeError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")

    updated = replace(_CONFIG, **options)
    if updated.default_cache_size < 1:
        raise ValueError(
            f"default_cache_size must be at least 1, got {updated.default_cache_size}"
        )

    _CONFIG = updated
    return _CONFIG


def _reset_config() -> None:
    """Restore the defaults. Used by the test suite."""
    global _CONFIG
    _CONFIG = FluxivityConfig()
