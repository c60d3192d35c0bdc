"""Shared config validation helpers."""

from __future__ import annotations

from typing import Any, Mapping, Sequence


def as_mapping(value: Any, context: str) -> dict[str, Any]:
    """Require mapping value."""
    if not isinstance(value, dict):
        raise ValueError(f"{context} must be a mapping.")
    return value


def opt_mapping(value: Any, context: str) -> dict[str, Any]:
    """Return mapping or empty mapping for None."""
    if value is None:
        return {}
    return as_mapping(value, context)


def required(mapping: Mapping[str, Any], key: str, context: str) -> Any:
    """Require mapping key existence."""
    if not isinstance(mapping, Mapping):
        raise ValueError(f"{context} must be a mapping.")
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context}.")
    return mapping[key]


def to_float(value: Any, key: str, context: str) -> float:
    """Convert value to float with contextual error message."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.")
    try:
        return float(value)
    except Exception as exc:
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.") from exc


def to_int(value: Any, key: str, context: str) -> int:
    """Convert value to int with contextual error message.

    Strings are parsed base-10 after stripping whitespace; floats are only
    accepted when integral.
    """
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
        return int(value)
    try:
        return int(str(value).strip(), 10) if isinstance(value, str) else int(value)
    except Exception as exc:
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.") from exc


def to_bool(value: Any, key: str, context: str) -> bool:
    """Require a real boolean."""
    if not isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be a boolean, got {value!r}.")
    return value


def ensure_nonnegative(name: str, value: float, *, allow_zero: bool = True) -> float:
    """Validate scalar non-negativity for already-numeric values."""
    x = float(value)
    if allow_zero:
        if x < 0.0:
            raise ValueError(f"{name} must be >= 0.")
    elif x <= 0.0:
        raise ValueError(f"{name} must be > 0.")
    return float(value)


def ensure_probability(name: str, value: float) -> float:
    """Validate that a scalar lies in [0, 1]."""
    x = float(value)
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value!r}.")
    return x


def reject_unknown_keys(mapping: Mapping[str, Any], allowed: Sequence[str], context: str) -> None:
    """Fail on keys not listed in ``allowed``."""
    unknown = sorted(set(mapping) - set(allowed))
    if unknown:
        joined = ", ".join(unknown)
        raise ValueError(f"{context} has unknown key(s): {joined}.")
