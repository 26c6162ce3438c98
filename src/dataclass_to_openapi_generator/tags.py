"""Read field-level annotations into structured attributes."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .errors import GeneratorError
from .json_types import FieldMetadata

if TYPE_CHECKING:
    from .config import SpecGenConfig

PATH = "path"
QUERY = "query"
HEADER = "header"

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ParameterLocationError(GeneratorError):
    """Raised when a field declares more than one parameter location."""


@dataclass(frozen=True)
class FieldTags:
    """Annotation-derived attributes of one struct field."""

    required: bool = False
    deprecated: bool = False
    description: str = ""
    format: str = ""
    default: Optional[str] = None
    enum: Optional[tuple[str, ...]] = None
    locations: tuple[tuple[str, str], ...] = ()

    def location(self) -> Optional[tuple[str, str]]:
        """Return the single ``(location, key)`` pair of the field, if any.

        Raises:
            ParameterLocationError: If several locations are declared.
        """
        if len(self.locations) > 1:
            declared = ", ".join(location for location, _ in self.locations)
            raise ParameterLocationError(f"Conflicting parameter locations: {declared}")
        if self.locations:
            return self.locations[0]
        return None


def parse_bool(raw: str) -> bool:
    """Parse a boolean annotation value.

    Raises:
        ValueError: If the value is not one of the accepted spellings.
    """
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {raw!r}")


def extract_tags(metadata: FieldMetadata, config: SpecGenConfig) -> FieldTags:
    """Collect the annotations the generator understands from field metadata."""
    rules = _split_list(metadata.get(config.validator_tag, ""))

    try:
        deprecated = parse_bool(metadata.get(config.deprecated_tag, "false"))
    except ValueError:
        deprecated = False

    enum_raw = metadata.get(config.enum_tag)
    enum = tuple(_split_list(enum_raw)) if enum_raw else None

    locations = tuple(
        (location, metadata[tag_name])
        for location, tag_name in (
            (PATH, config.path_location_tag),
            (QUERY, config.query_location_tag),
            (HEADER, config.header_location_tag),
        )
        if tag_name in metadata
    )

    return FieldTags(
        required=config.required_token in rules,
        deprecated=deprecated,
        description=metadata.get(config.description_tag, ""),
        format=metadata.get(config.format_tag, ""),
        default=metadata.get(config.default_tag) or None,
        enum=enum,
        locations=locations,
    )


def field_name_from_tag(field: dataclasses.Field, tag_name: str) -> str:
    """Return the serialized name of a field.

    The first comma-separated part of the naming annotation wins. A missing
    annotation or an empty name falls back to the attribute name, and ``-``
    excludes the field, which is reported as an empty string.
    """
    raw = field.metadata.get(tag_name)
    if raw is None:
        return field.name
    name = raw.split(",", maxsplit=1)[0].strip()
    if name == "-":
        return ""
    return name or field.name


def _split_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]
