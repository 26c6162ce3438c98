"""Split an operation input type into parameters and a request body."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .document import JSON_MEDIA_TYPE, MediaType, Parameter, RequestBody, Schema
from .fields import StructField
from .resolver import SchemaResolver, UnsupportedTypeError
from .tags import PATH
from .type_utils import is_struct, strip_optional


@dataclass(frozen=True)
class OperationInput:
    """Parameters and request body derived from one input type."""

    parameters: tuple[Parameter, ...]
    request_body: Optional[RequestBody]


def split_operation_input(
    python_type: Any,
    *,
    resolver: SchemaResolver,
) -> OperationInput:
    """Classify the fields of an input dataclass.

    Fields carrying a location annotation become parameters, every other
    field becomes a property of the inline request body schema.

    Args:
        python_type (Any): Input dataclass, optionally wrapped in ``Optional``.
        resolver (SchemaResolver): Resolver building field schemas.

    Returns:
        OperationInput: Parameters in field order and the request body, if any.

    Raises:
        UnsupportedTypeError: If the input type is not a dataclass.
        ParameterLocationError: If a field declares several locations.
    """
    struct_type = strip_optional(python_type)
    if not is_struct(struct_type):
        raise UnsupportedTypeError(f"Operation input must be a dataclass, got {python_type!r}")

    fields = resolver.struct_field_list(struct_type)
    if fields is None:
        return OperationInput(parameters=(), request_body=None)

    parameters: list[Parameter] = []
    seen: set[tuple[str, str]] = set()
    body_fields: list[StructField] = []
    for field in fields:
        located = field.tags.location()
        if located is None:
            body_fields.append(field)
            continue
        location, key = located
        name = key or field.name
        if (location, name) in seen:
            continue
        seen.add((location, name))
        parameter = _new_parameter(field, location, name, resolver)
        if parameter is not None:
            parameters.append(parameter)

    return OperationInput(
        parameters=tuple(parameters),
        request_body=_new_request_body(body_fields, resolver),
    )


def _new_parameter(
    field: StructField,
    location: str,
    name: str,
    resolver: SchemaResolver,
) -> Optional[Parameter]:
    # Path parameters are always required.
    required = field.tags.required or location == PATH
    schema = resolver.new_schema_from_struct_field(field, required, name, field.owner)
    if schema is None:
        return None
    if isinstance(schema, Schema):
        schema.description = None
        schema.deprecated = None
    return Parameter(
        name=name,
        in_=location,
        description=field.tags.description or None,
        required=required or None,
        deprecated=field.tags.deprecated or None,
        schema_=schema,
    )


def _new_request_body(
    fields: list[StructField],
    resolver: SchemaResolver,
) -> Optional[RequestBody]:
    if not fields:
        return None
    schema = resolver.object_schema(fields)
    if not schema.properties:
        return None
    return RequestBody(
        content={JSON_MEDIA_TYPE: MediaType(schema_=schema)},
        required=bool(schema.required) or None,
    )
