"""Coercion of loosely typed configuration values.

YAML scalars and environment strings both arrive here; each helper returns
`None` instead of raising so callers can attach source-specific messages.
"""

from __future__ import annotations

from typing import Mapping

BOOLEAN_TOKENS: Mapping[str, bool] = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def is_blank(value: object) -> bool:
    """Return whether a value counts as unset: `None` or whitespace-only text."""

    return value is None or not str(value).strip()


def coerce_boolean(value: object) -> bool | None:
    """Map a bool or boolean-like token (case-insensitive) to `bool`."""

    if isinstance(value, bool):
        return value
    if is_blank(value):
        return None
    return BOOLEAN_TOKENS.get(str(value).strip().lower())


def coerce_positive_int(value: object) -> int | None:
    """Map an int or integer text to a strictly positive `int`.

    Booleans are rejected even though they are `int` instances.
    """

    if isinstance(value, bool) or is_blank(value):
        return None
    if isinstance(value, int):
        parsed = value
    else:
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return None
    return parsed if parsed > 0 else None
