"""Environment helper utilities.

Provides functions for parsing environment variables into the typed values
used by the declarative config modules.
"""

from __future__ import annotations

import os


def env_flag(name: str, default: bool) -> bool:
    """Return True/False for typical truthy env encodings."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_csv(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Split a comma-separated env var into a tuple of non-empty items.

    Args:
        name: Environment variable to read.
        default: Value returned when the variable is unset or blank.

    Returns:
        Tuple of stripped entries in the order they were listed.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


__all__ = [
    "env_flag",
    "env_csv",
]
