"""Annotation vocabulary supplied by the request-binding layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .naming import TypeNamer


@dataclass(frozen=True)
class SpecGenConfig:
    """Names of the field metadata keys the generator reads.

    Attributes:
        validator_tag (str): Key holding comma-separated validation rules.
        path_location_tag (str): Key binding a field to a path segment.
        query_location_tag (str): Key binding a field to a query parameter.
        header_location_tag (str): Key binding a field to a request header.
        enum_tag (str): Key holding comma-separated allowed values.
        default_tag (str): Key holding the default value.
        deprecated_tag (str): Key holding a boolean deprecation flag.
        description_tag (str): Key holding a free-text description.
        format_tag (str): Key overriding the schema format.
        name_tag (str): Key holding the serialized property name.
        required_token (str): Validation rule that marks a field as required.
        path_marker (str): Character prefixing path placeholders in routes.
        type_namer (Optional[type]): Runtime-checkable protocol a class
            satisfies to provide its own schema name, or ``None`` to disable
            self-naming.
    """

    validator_tag: str
    path_location_tag: str
    query_location_tag: str
    header_location_tag: str
    enum_tag: str
    default_tag: str
    deprecated_tag: str = "deprecated"
    description_tag: str = "description"
    format_tag: str = "format"
    name_tag: str = "json"
    required_token: str = "required"
    path_marker: str = ":"
    type_namer: Optional[type] = TypeNamer


TONIC_CONFIG = SpecGenConfig(
    validator_tag="validate",
    path_location_tag="path",
    query_location_tag="query",
    header_location_tag="header",
    enum_tag="enum",
    default_tag="default",
)
