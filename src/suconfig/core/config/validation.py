"""Validation utilities for configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional, Type, TypeVar

from .coercion import parse_int
from .registry import FieldMetadata

E = TypeVar("E", bound=IntEnum)


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


def to_enum(enum_cls: Type[E], raw: Any) -> Optional[E]:
    """Convert a raw stored value to ``enum_cls``.

    Returns ``None`` when the value is absent, not an integer encoding,
    or outside the enumeration.
    """
    number = parse_int(raw)
    if number is None:
        return None
    try:
        return enum_cls(number)
    except ValueError:
        return None


def _is_valid_type(value: Any, expected_type: type) -> bool:
    if expected_type is bool:
        return isinstance(value, bool)
    if expected_type is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if expected_type is str:
        return isinstance(value, str)
    return True


def validate(value: Any, field_meta: FieldMetadata) -> List[ValidationError]:
    errors: List[ValidationError] = []
    if not _is_valid_type(value, field_meta.type):
        errors.append(
            ValidationError(
                field_meta.key,
                f"Expected {field_meta.type.__name__}, got {type(value).__name__}.",
            )
        )
        return errors
    if field_meta.choices is not None:
        choices = [int(c) if isinstance(c, IntEnum) else c for c in field_meta.choices]
        if value not in choices:
            errors.append(
                ValidationError(
                    field_meta.key,
                    f"Value must be one of: {', '.join(map(str, choices))}.",
                )
            )
    return errors


def validate_config(config: Any) -> Dict[str, List[ValidationError]]:
    """Validate every declared property of a config instance, keyed by key."""
    errors: Dict[str, List[ValidationError]] = {}
    for key, meta in config.registry().items():
        field_errors = validate(getattr(config, meta.attr), meta)
        if field_errors:
            errors[key] = field_errors
    return errors
