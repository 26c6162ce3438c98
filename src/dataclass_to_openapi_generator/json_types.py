"""JSON-compatible typing aliases for serialized documents and annotation values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

type JSONScalar = Union[str, int, float, bool, None]
type JSONValue = JSONScalar | list[JSONValue] | Mapping[str, JSONValue]
type MutableJSONObject = dict[str, JSONValue]
type FieldMetadata = Mapping[str, str]
