"""Value coercion utilities for stored and user-supplied values."""

from __future__ import annotations

import re
from typing import Any, Optional

from .errors import InvalidValueError
from .registry import FieldMetadata

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

# Optional sign and ASCII digits, nothing else
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: Any) -> Optional[int]:
    """Parse a stored integer encoding; ``None`` when it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INT_PATTERN.fullmatch(raw):
        return int(raw)
    return None


def encode_int(value: int) -> str:
    return str(int(value))


def _coerce_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    return value


def _coerce_int(value: Any) -> Any:
    parsed = parse_int(value.strip() if isinstance(value, str) else value)
    return value if parsed is None else parsed


def coerce(raw: Any, field_meta: FieldMetadata) -> Any:
    """Coerce raw input (e.g. CLI text) to the field's logical type.

    Raises:
        InvalidValueError: if the input cannot represent the field's type.
    """
    target = field_meta.type
    if target is bool:
        value = _coerce_bool(raw)
        if not isinstance(value, bool):
            raise InvalidValueError(field_meta.key, raw, "expected bool")
        return value
    if target is int:
        value = _coerce_int(raw)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidValueError(field_meta.key, raw, "expected int")
        return value
    if target is str:
        return raw if isinstance(raw, str) else str(raw)
    return raw
