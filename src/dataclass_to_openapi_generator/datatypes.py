"""Primitive type mapping and annotation value conversion."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID

from .tags import parse_bool


class ConversionError(ValueError):
    """Raised when an annotation string cannot be converted to a field type."""


@dataclass(frozen=True)
class DataType:
    """OpenAPI ``type``/``format`` pair of a primitive Python type."""

    type: str
    format: Optional[str] = None


# Checked in order; subclasses must come before their bases.
_PRIMITIVES: tuple[tuple[type, DataType], ...] = (
    (bool, DataType("boolean")),
    (int, DataType("integer", "int64")),
    (float, DataType("number", "double")),
    (Decimal, DataType("string", "decimal")),
    (str, DataType("string")),
    (bytes, DataType("string", "binary")),
    (bytearray, DataType("string", "binary")),
    (datetime, DataType("string", "date-time")),
    (date, DataType("string", "date")),
    (time, DataType("string", "time")),
    (timedelta, DataType("string", "duration")),
    (UUID, DataType("string", "uuid")),
)


def primitive_datatype(python_type: Any) -> Optional[DataType]:
    """Return the data type of a primitive class, or ``None``."""
    if not isinstance(python_type, type):
        return None
    if issubclass(python_type, enum.Enum):
        return enum_datatype(python_type)
    for candidate, datatype in _PRIMITIVES:
        if issubclass(python_type, candidate):
            return datatype
    return None


def enum_datatype(enum_type: type[enum.Enum]) -> Optional[DataType]:
    """Return the data type shared by every member value of an enum."""
    value_types = {type(member.value) for member in enum_type}
    if len(value_types) != 1:
        return None
    value_type = value_types.pop()
    if issubclass(value_type, enum.Enum):
        return None
    return primitive_datatype(value_type)


def enum_values(enum_type: type[enum.Enum]) -> list[Any]:
    """Return the member values of an enum in definition order."""
    return [member.value for member in enum_type]


def convert_string(raw: str, python_type: Any) -> Any:
    """Convert an annotation string to a JSON-compatible value of a type.

    Args:
        raw (str): Annotation value, e.g. a default or one enum token.
        python_type (Any): Bare target type (wrappers already removed).

    Returns:
        Any: The converted value.

    Raises:
        ConversionError: If the value does not fit the type or the type has
            no string form.
    """
    if not isinstance(python_type, type):
        raise ConversionError(f"Cannot convert {raw!r} to {python_type!r}")
    if issubclass(python_type, enum.Enum):
        return _convert_enum(raw, python_type)

    try:
        if issubclass(python_type, bool):
            return parse_bool(raw)
        if issubclass(python_type, int):
            return int(raw)
        if issubclass(python_type, float):
            return float(raw)
        if issubclass(python_type, Decimal):
            return str(Decimal(raw))
        if issubclass(python_type, str):
            return raw
        if issubclass(python_type, datetime):
            return datetime.fromisoformat(raw)
        if issubclass(python_type, date):
            return date.fromisoformat(raw)
        if issubclass(python_type, time):
            return time.fromisoformat(raw)
        if issubclass(python_type, UUID):
            return UUID(raw)
    except (ValueError, InvalidOperation) as exc:
        raise ConversionError(f"Cannot convert {raw!r} to {python_type.__name__}: {exc}") from exc
    raise ConversionError(f"Type {python_type.__name__} has no string form for {raw!r}")


def _convert_enum(raw: str, enum_type: type[enum.Enum]) -> Any:
    for member in enum_type:
        if raw in (member.name, str(member.value)):
            return member.value
    raise ConversionError(f"{raw!r} is not a member of {enum_type.__name__}")
