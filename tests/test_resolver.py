"""Unit tests for schema resolution."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Optional

import pytest

from dataclass_to_openapi_generator.config import TONIC_CONFIG
from dataclass_to_openapi_generator.document import Reference, Schema
from dataclass_to_openapi_generator.errors import FieldError, SchemaTypeError
from dataclass_to_openapi_generator.fields import struct_fields
from dataclass_to_openapi_generator.resolver import UnsupportedTypeError

from .fixture_helpers import load_expected, short_name_generator
from .sample_types import Catalog, CycA, Defaults, Item, Node, Page, T, Ticket, X, Y


def test_primitive_pointer_is_nullable() -> None:
    """Optional primitives resolve inline and are marked nullable."""
    generator = short_name_generator()
    schema = generator.new_schema_from_type(Optional[int])

    assert isinstance(schema, Schema)
    assert schema.type == "integer"
    assert schema.format == "int64"
    assert schema.nullable is True
    assert generator.errors() == []


def test_missing_type_is_reported() -> None:
    """Resolving ``None`` yields no schema and one error."""
    generator = short_name_generator()

    assert generator.new_schema_from_type(None) is None
    errors = generator.errors()
    assert len(errors) == 1
    assert isinstance(errors[0], SchemaTypeError)


def test_unsupported_type_is_reported() -> None:
    """Callables cannot be described and add exactly one error."""
    generator = short_name_generator()

    assert generator.new_schema_from_type(Callable[[], None]) is None
    errors = generator.errors()
    assert len(errors) == 1
    assert str(errors[0])


def test_map_with_unsupported_keys_is_reported(caplog: pytest.LogCaptureFixture) -> None:
    """Mappings need string keys; the error is also logged."""
    generator = short_name_generator()

    with caplog.at_level(logging.WARNING, logger="dataclass_to_openapi_generator"):
        assert generator.new_schema_from_type(dict[int, str]) is None

    errors = generator.errors()
    assert len(errors) == 1
    assert isinstance(errors[0], SchemaTypeError)
    assert errors[0].python_type == dict[int, str]
    assert "unsupported map key type" in caplog.text


def test_complex_struct_matches_fixtures() -> None:
    """Named dataclasses register once and are referenced everywhere."""
    generator = short_name_generator()

    schema_or_ref = generator.new_schema_from_type(Optional[X])
    assert isinstance(schema_or_ref, Reference)
    assert schema_or_ref.as_dict() == {"$ref": "#/components/schemas/XXX"}

    resolved = generator.resolve_schema(schema_or_ref)
    assert resolved is not None
    assert resolved.as_dict() == load_expected("x")

    schemas = generator.document().components.schemas
    assert set(schemas) == {"XXX", "Y"}
    assert schemas["Y"].as_dict() == load_expected("y")

    # Only the integer-keyed map of X cannot be described.
    assert len(generator.errors()) == 1


def test_resolving_twice_returns_the_same_reference() -> None:
    """A registered type resolves to a reference without new components."""
    generator = short_name_generator()

    first = generator.new_schema_from_type(Y)
    second = generator.new_schema_from_type(Optional[Y])

    assert isinstance(first, Reference)
    assert isinstance(second, Reference)
    assert first.ref == second.ref == "#/components/schemas/Y"
    assert list(generator.document().components.schemas) == ["Y"]


def test_new_schema_from_struct_rejects_non_dataclasses() -> None:
    """Only dataclasses can be described as object schemas."""
    generator = short_name_generator()

    with pytest.raises(UnsupportedTypeError):
        generator.new_schema_from_struct(Optional[str])


def test_struct_field_errors_are_collected() -> None:
    """Field annotation problems are reported one by one."""
    generator = short_name_generator()
    field_a, field_b, field_c = struct_fields(Defaults, TONIC_CONFIG)

    # Required and defaulted: reported, the default is still applied.
    schema = generator.new_schema_from_struct_field(field_a, True, "a", Defaults)
    assert isinstance(schema, Schema)
    assert schema.default == "foobar"
    assert len(generator.errors()) == 1

    # Default not convertible to an integer.
    schema = generator.new_schema_from_struct_field(field_b, False, "b", Defaults)
    assert isinstance(schema, Schema)
    assert schema.default is None
    assert len(generator.errors()) == 2

    # One error per enum value that is not an integer.
    schema = generator.new_schema_from_struct_field(field_c, True, "c", Defaults)
    assert isinstance(schema, Schema)
    assert schema.enum == [1]
    errors = generator.errors()
    assert len(errors) == 4
    assert all(isinstance(error, FieldError) for error in errors)
    assert [error.value for error in errors[2:]] == ["a", "c"]
    assert errors[1].parent is Defaults


def test_generic_dataclass_is_inlined_with_arguments() -> None:
    """Parametrised generics are anonymous and resolve their type variables."""
    generator = short_name_generator()

    schema = generator.new_schema_from_type(Page[int])

    assert isinstance(schema, Schema)
    assert schema.as_dict() == {
        "type": "object",
        "properties": {
            "items": {"type": "array", "items": {"type": "integer", "format": "int64"}},
            "total": {"type": "integer", "format": "int64"},
        },
    }
    assert generator.document().components.schemas == {}


def test_recursive_anonymous_type_is_reported() -> None:
    """An anonymous type containing itself stops at the first repetition."""
    generator = short_name_generator()

    schema = generator.new_schema_from_type(Node[str])

    assert isinstance(schema, Schema)
    assert schema.as_dict() == {"type": "object", "properties": {"value": {"type": "string"}}}
    errors = generator.errors()
    assert len(errors) == 1
    assert "recursive anonymous type" in str(errors[0])


def test_enum_and_collection_fields() -> None:
    """Enums carry their values; sets and free-form maps are supported."""
    generator = short_name_generator()

    reference = generator.new_schema_from_type(Ticket)
    schema = generator.resolve_schema(reference)

    assert schema is not None
    assert schema.as_dict() == {
        "type": "object",
        "properties": {
            "color": {"type": "string", "enum": ["red", "green"], "default": "green"},
            "priority": {"type": "integer", "format": "int64", "enum": [1, 2]},
            "labels": {"type": "array", "items": {"type": "string"}},
            "attributes": {"type": "object", "additionalProperties": {}},
        },
    }
    assert generator.errors() == []


def test_name_collisions_get_a_suffix() -> None:
    """Distinct types deriving the same name stay distinct components."""
    generator = short_name_generator()

    first = generator.new_schema_from_type(Item)
    second = generator.new_schema_from_type(Catalog.Item)

    assert isinstance(first, Reference)
    assert isinstance(second, Reference)
    assert first.schema_name == "Item"
    assert second.schema_name == "Item2"
    schemas = generator.document().components.schemas
    assert set(schemas["Item"].properties or {}) == {"sku"}
    assert set(schemas["Item2"].properties or {}) == {"name"}


def test_indirect_self_embedding_is_skipped() -> None:
    """Embedding cycles through another type do not recurse."""
    generator = short_name_generator()

    reference = generator.new_schema_from_type(CycA)
    schema = generator.resolve_schema(reference)

    assert schema is not None
    assert schema.as_dict() == {
        "type": "object",
        "properties": {"b1": {"type": "string"}, "a1": {"type": "string"}},
    }
    assert list(generator.document().components.schemas) == ["CycA"]
    assert generator.errors() == []


def test_unevaluable_field_hints_are_reported() -> None:
    """Hints naming a function-local class are an error, not a crash."""

    @dataclass
    class Inner:
        value: str = ""

    @dataclass
    class Outer:
        inner: Optional[Inner] = None

    generator = short_name_generator()

    assert generator.new_schema_from_type(Outer) is None
    assert generator.document().components.schemas == {}
    errors = generator.errors()
    assert len(errors) == 1
    assert isinstance(errors[0], SchemaTypeError)
    assert errors[0].python_type is Outer

    # The failed attempt left nothing cached behind.
    assert generator.new_schema_from_type(Optional[Outer]) is None
    assert len(generator.errors()) == 2
    assert generator.document().components.schemas == {}


def test_unevaluable_hints_of_anonymous_types_are_reported() -> None:
    """Parametrised generics with broken hints are reported as well."""

    @dataclass
    class Marker:
        pass

    @dataclass
    class Box(Generic[T]):
        content: T
        marker: Optional[Marker] = None

    generator = short_name_generator()

    assert generator.new_schema_from_type(Box[int]) is None
    errors = generator.errors()
    assert len(errors) == 1
    assert isinstance(errors[0], SchemaTypeError)
