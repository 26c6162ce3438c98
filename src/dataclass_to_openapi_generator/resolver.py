"""Resolve Python type hints into schemas and component references."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional, get_args, get_origin

from .config import SpecGenConfig
from .datatypes import ConversionError, convert_string, enum_values, primitive_datatype
from .document import Components, Reference, Schema, SchemaOrRef
from .errors import FieldError, GeneratorError, SchemaTypeError
from .fields import StructField, flatten_fields
from .naming import NameRegistry
from .type_utils import is_struct, strip_optional, unwrap

logger = logging.getLogger(__name__)

_NOT_ITERABLE = (str, bytes, bytearray, Mapping)


class UnsupportedTypeError(GeneratorError):
    """Raised when an entry point receives a type it cannot work with."""


class SchemaResolver:
    """Build schemas for types and register named dataclasses as components.

    Errors found while walking a type are handed to ``report`` and resolution
    carries on with whatever could be built.
    """

    def __init__(
        self,
        *,
        config: SpecGenConfig,
        components: Components,
        names: NameRegistry,
        type_name: Callable[[Any], str],
        report: Callable[[Exception], None],
    ) -> None:
        self._config = config
        self._components = components
        self._names = names
        self._type_name = type_name
        self._report = report
        self._resolving: set[Any] = set()

    def resolve(self, python_type: Any) -> Optional[SchemaOrRef]:
        """Return the schema of a type, or ``None`` if it has none."""
        if python_type is None:
            self._report(SchemaTypeError("cannot build a schema without a type", python_type))
            return None
        hint, nullable = unwrap(python_type)
        schema = self._resolve_hint(hint)
        if nullable and isinstance(schema, Schema):
            schema.nullable = True
        return schema

    def resolve_schema(self, schema_or_ref: Optional[SchemaOrRef]) -> Optional[Schema]:
        """Follow a reference to its component schema."""
        if isinstance(schema_or_ref, Reference):
            return self._components.schemas.get(schema_or_ref.schema_name)
        return schema_or_ref

    def new_schema_from_struct(self, python_type: Any) -> Optional[SchemaOrRef]:
        """Return the schema of a dataclass, registering it when it is named.

        Raises:
            UnsupportedTypeError: If the type is not a dataclass.
        """
        struct_type = strip_optional(python_type)
        if not is_struct(struct_type):
            raise UnsupportedTypeError(f"Expected a dataclass type, got {python_type!r}")

        name = self._type_name(struct_type)
        if not name:
            return self._new_inline_struct_schema(struct_type)

        assigned = self._names.assigned(struct_type)
        if assigned is not None:
            return Reference.to_schema(assigned)

        # Collected before the name is claimed so a failure leaves no component behind.
        fields = self.struct_field_list(struct_type)
        if fields is None:
            return None

        component_name = self._names.claim(struct_type, name)
        if component_name != name:
            logger.warning(
                "Schema name %r is taken, registering %r as %r", name, struct_type, component_name
            )
        # Registered before the fields are walked so self-references resolve to it.
        schema = Schema(type="object")
        self._components.schemas[component_name] = schema
        logger.debug("Registered schema %r for %r", component_name, struct_type)

        self._fill_object_schema(schema, fields)
        return Reference.to_schema(component_name)

    def struct_field_list(self, struct_type: Any) -> Optional[list[StructField]]:
        """Return the flattened fields of a dataclass, or ``None`` if its hints are broken.

        Type hints that cannot be evaluated, such as postponed annotations
        naming a class local to a function, are reported as one error.
        """
        try:
            return list(flatten_fields(struct_type, self._config))
        except (NameError, TypeError) as exc:
            self._report(SchemaTypeError(f"cannot evaluate type hints ({exc})", struct_type))
            return None

    def object_schema(self, fields: Iterable[StructField]) -> Schema:
        """Build an inline object schema from already flattened fields."""
        schema = Schema(type="object")
        self._fill_object_schema(schema, fields)
        return schema

    def new_schema_from_struct_field(
        self,
        field: StructField,
        required: bool,
        name: str,
        parent: Any,
    ) -> Optional[SchemaOrRef]:
        """Return the schema of one field with its annotations applied.

        Annotations only apply to inline schemas; a reference to a component
        is returned untouched.
        """
        schema = self.resolve(field.type)
        if schema is None or isinstance(schema, Reference):
            return schema

        tags = field.tags
        if tags.description:
            schema.description = tags.description
        if tags.deprecated:
            schema.deprecated = True
        if tags.format:
            schema.format = tags.format

        value_type = strip_optional(field.type)
        if tags.default is not None:
            if required:
                self._report(
                    FieldError(
                        "field cannot be required and have a default value",
                        name=name,
                        python_type=field.type,
                        parent=parent,
                        value=tags.default,
                    )
                )
            try:
                schema.default = convert_string(tags.default, value_type)
            except ConversionError as exc:
                self._report(
                    FieldError(
                        f"default value cannot be converted: {exc}",
                        name=name,
                        python_type=field.type,
                        parent=parent,
                        value=tags.default,
                    )
                )

        if tags.enum is not None:
            values: list[Any] = []
            for token in tags.enum:
                try:
                    values.append(convert_string(token, value_type))
                except ConversionError as exc:
                    self._report(
                        FieldError(
                            f"enum value cannot be converted: {exc}",
                            name=name,
                            python_type=field.type,
                            parent=parent,
                            value=token,
                        )
                    )
            if values:
                schema.enum = values
        return schema

    def _resolve_hint(self, hint: Any) -> Optional[SchemaOrRef]:
        if hint is Any:
            return Schema()
        if is_struct(hint):
            return self.new_schema_from_struct(hint)

        datatype = primitive_datatype(hint)
        if datatype is not None:
            schema = Schema(type=datatype.type, format=datatype.format)
            if isinstance(hint, type) and issubclass(hint, enum.Enum):
                schema.enum = enum_values(hint) or None
            return schema

        container = get_origin(hint) or hint
        if isinstance(container, type):
            args = get_args(hint)
            if issubclass(container, Mapping):
                return self._mapping_schema(hint, args)
            if issubclass(container, tuple):
                return self._tuple_schema(hint, args)
            if issubclass(container, Iterable) and not issubclass(container, _NOT_ITERABLE):
                return self._array_schema(args[0] if args else Any)

        self._report(SchemaTypeError("unsupported type", hint))
        return None

    def _mapping_schema(self, hint: Any, args: tuple[Any, ...]) -> Optional[Schema]:
        key_type, value_type = args if len(args) == 2 else (str, Any)
        key_type = strip_optional(key_type)
        if not (isinstance(key_type, type) and issubclass(key_type, str)):
            self._report(SchemaTypeError("unsupported map key type", hint))
            return None
        value_schema = self.resolve(value_type)
        if value_schema is None:
            return None
        return Schema(type="object", additional_properties=value_schema)

    def _tuple_schema(self, hint: Any, args: tuple[Any, ...]) -> Optional[Schema]:
        if not args:
            return self._array_schema(Any)
        if len(args) == 2 and args[1] is Ellipsis:
            return self._array_schema(args[0])
        if all(arg == args[0] for arg in args):
            return self._array_schema(args[0])
        self._report(SchemaTypeError("unsupported heterogeneous tuple", hint))
        return None

    def _array_schema(self, item_type: Any) -> Optional[Schema]:
        items = self.resolve(item_type)
        if items is None:
            return None
        return Schema(type="array", items=items)

    def _new_inline_struct_schema(self, struct_type: Any) -> Optional[Schema]:
        if struct_type in self._resolving:
            self._report(SchemaTypeError("recursive anonymous type", struct_type))
            return None
        fields = self.struct_field_list(struct_type)
        if fields is None:
            return None
        self._resolving.add(struct_type)
        try:
            return self.object_schema(fields)
        finally:
            self._resolving.discard(struct_type)

    def _fill_object_schema(self, schema: Schema, fields: Iterable[StructField]) -> None:
        properties: dict[str, SchemaOrRef] = {}
        required: list[str] = []
        seen: set[str] = set()
        for field in fields:
            name = field.serialized_name
            # First field with a given name wins, including names from embedded types.
            if not name or name in seen:
                continue
            seen.add(name)
            property_schema = self.new_schema_from_struct_field(
                field, field.tags.required, name, field.owner
            )
            if property_schema is None:
                continue
            properties[name] = property_schema
            if field.tags.required:
                required.append(name)
        schema.properties = properties or None
        schema.required = required or None
