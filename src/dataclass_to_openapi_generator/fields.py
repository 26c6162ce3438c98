"""Introspect dataclass fields into descriptors the resolver works with."""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from .tags import FieldTags, extract_tags, field_name_from_tag
from .type_utils import is_struct, split_annotated, strip_optional, struct_class

if TYPE_CHECKING:
    from .config import SpecGenConfig


class Embedded:
    """Marker expanding a field's members into the enclosing type.

    Used as ``Annotated[Optional[Base], Embedded]``.
    """


@dataclass(frozen=True)
class StructField:
    """One dataclass field with its annotations already parsed."""

    name: str
    serialized_name: str
    type: Any
    embedded: bool
    tags: FieldTags
    owner: Any

    @property
    def exported(self) -> bool:
        """Whether the field is part of the public shape of its owner."""
        return not self.name.startswith("_")


def struct_fields(python_type: Any, config: SpecGenConfig) -> list[StructField]:
    """Return the declared fields of a dataclass in declaration order.

    Type variables of a parametrised generic dataclass are replaced by the
    arguments of ``python_type``; unbound ones become ``Any``.
    """
    cls = struct_class(python_type)
    hints = typing.get_type_hints(cls, include_extras=True)
    parameters = getattr(cls, "__parameters__", ())
    substitutions = dict(zip(parameters, typing.get_args(python_type)))

    result: list[StructField] = []
    for field in dataclasses.fields(cls):
        hint = _substitute(hints.get(field.name, Any), substitutions)
        bare, extras = split_annotated(hint)
        result.append(
            StructField(
                name=field.name,
                serialized_name=field_name_from_tag(field, config.name_tag),
                type=hint,
                embedded=any(extra is Embedded or isinstance(extra, Embedded) for extra in extras)
                and is_struct(strip_optional(bare)),
                tags=extract_tags(field.metadata, config),
                owner=python_type,
            )
        )
    return result


def flatten_fields(
    python_type: Any,
    config: SpecGenConfig,
    *,
    expanding: frozenset[Any] = frozenset(),
) -> Iterator[StructField]:
    """Yield the exported fields of a dataclass with embedded fields expanded.

    An embedded field whose type is already being expanded, such as a type
    embedding itself, is skipped.
    """
    expanding = expanding | {python_type}
    for field in struct_fields(python_type, config):
        if not field.exported:
            continue
        if field.embedded:
            embedded_type = strip_optional(field.type)
            if embedded_type in expanding:
                continue
            yield from flatten_fields(embedded_type, config, expanding=expanding)
            continue
        yield field


def _substitute(hint: Any, substitutions: dict[Any, Any]) -> Any:
    if isinstance(hint, TypeVar):
        return substitutions.get(hint, Any)
    parameters = getattr(hint, "__parameters__", ())
    if parameters and typing.get_origin(hint) is not None:
        return hint[tuple(substitutions.get(parameter, Any) for parameter in parameters)]
    return hint
