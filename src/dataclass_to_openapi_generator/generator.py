"""Assemble an OpenAPI document from operation input and output types."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from http import HTTPStatus
from typing import Any, Optional

from .config import SpecGenConfig
from .document import (
    JSON_MEDIA_TYPE,
    Header,
    Info,
    MediaType,
    OpenAPI,
    Operation,
    PathItem,
    Response,
    Schema,
    SchemaOrRef,
    Tag,
)
from .errors import GeneratorError
from .fields import StructField
from .model_types import OperationInfo, ResponseHeader
from .naming import HTTP_METHODS, NameRegistry, default_type_name, rewrite_path
from .params import split_operation_input
from .resolver import SchemaResolver, UnsupportedTypeError
from .type_utils import is_struct, strip_optional

logger = logging.getLogger(__name__)


class ConfigurationError(GeneratorError):
    """Raised when a generator is created without a usable configuration."""


class InvalidOperationError(GeneratorError):
    """Raised when operation metadata is missing or malformed."""


class DuplicateOperationError(GeneratorError):
    """Raised when an operation identifier is already used in the document."""


class DuplicateResponseError(GeneratorError):
    """Raised when a status code is already set on an operation."""


class InvalidStatusCodeError(GeneratorError):
    """Raised when a response status code is not a positive integer."""


class Generator:
    """Accumulate operations and schemas into one document.

    Hard errors are raised from the call that caused them. Problems found
    while building schemas are collected in ``errors()`` and the generator
    keeps going with a best-effort schema.
    """

    def __init__(self, config: Optional[SpecGenConfig]) -> None:
        if config is None:
            raise ConfigurationError("A generator cannot be created without a configuration")
        self._config = config
        self._document = OpenAPI()
        self._names = NameRegistry()
        self._full_names = True
        self._errors: list[Exception] = []
        self._operation_ids: set[str] = set()
        self._resolver = SchemaResolver(
            config=config,
            components=self._document.components,
            names=self._names,
            type_name=self.type_name,
            report=self._error,
        )

    def document(self) -> OpenAPI:
        """Return the document assembled so far."""
        return self._document

    def errors(self) -> list[Exception]:
        """Return the non-fatal errors in the order they were found."""
        return list(self._errors)

    def use_full_schema_names(self, full: bool) -> None:
        """Toggle module-qualified default schema names."""
        self._full_names = full

    def set_info(self, info: Info) -> None:
        """Replace the document metadata."""
        self._document.info = info

    def add_tag(self, name: str, description: str) -> None:
        """Add a tag, or update the description of an existing one.

        Tags stay sorted by name. Empty names are ignored.
        """
        if not name:
            return
        tags = self._document.tags
        if tags is None:
            tags = []
            self._document.tags = tags
        for tag in tags:
            if tag is not None and tag.name == name:
                tag.description = description or None
                break
        else:
            tags.append(Tag(name=name, description=description or None))
        tags.sort(key=_tag_sort_key)

    def override_type_name(self, python_type: Any, name: str) -> None:
        """Register the schema name of a type, taking precedence over any other.

        Raises:
            TypeNameError: If the name is empty, the type is already named
                differently, or the name belongs to another type.
        """
        self._names.override(python_type, name)

    def type_name(self, python_type: Any) -> str:
        """Return the schema name of a type, or an empty string if it has none."""
        target = strip_optional(python_type)
        overridden = self._names.overridden(target)
        if overridden:
            return overridden
        namer = self._config.type_namer
        if (
            namer is not None
            and isinstance(target, type)
            and isinstance(target, namer)
            and callable(getattr(target, "type_name", None))
        ):
            return target.type_name()
        return default_type_name(target, full=self._full_names)

    def new_schema_from_type(self, python_type: Any) -> Optional[SchemaOrRef]:
        """Return the schema or component reference of a type."""
        return self._resolver.resolve(python_type)

    def new_schema_from_struct(self, python_type: Any) -> Optional[SchemaOrRef]:
        """Return the schema or component reference of a dataclass.

        Raises:
            UnsupportedTypeError: If the type is not a dataclass.
        """
        return self._resolver.new_schema_from_struct(python_type)

    def new_schema_from_struct_field(
        self,
        field: StructField,
        required: bool,
        name: str,
        parent: Any,
    ) -> Optional[SchemaOrRef]:
        """Return the schema of one field with its annotations applied."""
        return self._resolver.new_schema_from_struct_field(field, required, name, parent)

    def resolve_schema(self, schema_or_ref: Optional[SchemaOrRef]) -> Optional[Schema]:
        """Follow a reference to the registered component schema."""
        return self._resolver.resolve_schema(schema_or_ref)

    def add_operation(
        self,
        path: str,
        method: str,
        tag: str,
        in_type: Any,
        out_type: Any,
        info: Optional[OperationInfo],
    ) -> Operation:
        """Build an operation and register it under a path and method.

        Args:
            path (str): Route template using the configured placeholder marker.
            method (str): HTTP method, case-insensitive.
            tag (str): Tag attached to the operation; empty for none.
            in_type (Any): Input dataclass, or ``None`` for no input.
            out_type (Any): Type of the success response body, or ``None``.
            info (Optional[OperationInfo]): Operation metadata.

        Returns:
            Operation: The registered operation.

        Raises:
            UnsupportedTypeError: If the input type is not a dataclass.
            InvalidOperationError: If the identifier or method is invalid.
            DuplicateOperationError: If the identifier is already used.
            InvalidStatusCodeError: If a response status code is invalid.
            DuplicateResponseError: If a status code is declared twice.
            ParameterLocationError: If an input field has several locations.
        """
        if in_type is not None and not is_struct(strip_optional(in_type)):
            raise UnsupportedTypeError(f"Operation input must be a dataclass, got {in_type!r}")
        if info is None or not info.id:
            raise InvalidOperationError(f"Operation {method} {path} has no identifier")
        if info.id in self._operation_ids:
            raise DuplicateOperationError(f"Operation identifier {info.id!r} is already used")
        method_key = method.lower()
        if method_key not in HTTP_METHODS:
            raise InvalidOperationError(f"Unsupported HTTP method: {method!r}")

        operation = Operation(
            operation_id=info.id,
            summary=info.summary or None,
            description=info.description or None,
            deprecated=info.deprecated or None,
        )
        if in_type is not None:
            self.set_operation_params(operation, in_type)

        self.set_operation_response(
            operation,
            out_type,
            str(info.status_code),
            JSON_MEDIA_TYPE,
            info.status_description,
            info.headers,
        )
        for response in info.responses:
            self.set_operation_response(
                operation,
                response.model,
                response.code,
                JSON_MEDIA_TYPE,
                response.description,
                response.headers,
            )

        if tag:
            operation.tags = [tag]
            if not self._has_tag(tag):
                self.add_tag(tag, "")

        path_key = rewrite_path(path, marker=self._config.path_marker)
        item = self._document.paths.get(path_key)
        if item is None:
            item = PathItem()
            self._document.paths[path_key] = item
        set_operation_by_method(item, operation, method_key)
        self._operation_ids.add(info.id)
        logger.debug("Registered operation %r as %s %s", info.id, method_key.upper(), path_key)
        return operation

    def set_operation_params(self, operation: Operation, python_type: Any) -> None:
        """Fill the parameters and request body of an operation from its input type.

        Raises:
            UnsupportedTypeError: If the input type is not a dataclass.
            ParameterLocationError: If a field declares several locations.
        """
        operation_input = split_operation_input(
            python_type,
            resolver=self._resolver,
        )
        operation.parameters = list(operation_input.parameters) or None
        operation.request_body = operation_input.request_body

    def set_operation_response(
        self,
        operation: Operation,
        python_type: Any,
        code: str,
        media_type: str,
        description: str,
        headers: Iterable[ResponseHeader] = (),
    ) -> None:
        """Add the response for one status code to an operation.

        Raises:
            InvalidStatusCodeError: If the code is not a positive integer.
            DuplicateResponseError: If the operation already has the code.
        """
        # Plain ASCII digits only; int() would also take "+200", " 200 " or "2_00".
        if not (code.isascii() and code.isdigit()) or int(code) <= 0:
            raise InvalidStatusCodeError(f"Invalid response status code: {code!r}")
        status = int(code)
        key = str(status)
        if key in operation.responses:
            raise DuplicateResponseError(
                f"Response {key} is already set on operation {operation.operation_id!r}"
            )

        response = Response(description=description or _reason_phrase(status))
        if python_type is not None:
            schema = self._resolver.resolve(python_type)
            if schema is not None:
                response.content = {media_type or JSON_MEDIA_TYPE: MediaType(schema_=schema)}
        response_headers = {header.name: self._new_header(header) for header in headers}
        response.headers = response_headers or None
        operation.responses[key] = response

    def _new_header(self, header: ResponseHeader) -> Header:
        schema: Optional[SchemaOrRef] = None
        if header.model is not None:
            schema = self._resolver.resolve(header.model)
        if schema is None:
            schema = Schema(type="string")
        return Header(description=header.description or None, schema_=schema)

    def _has_tag(self, name: str) -> bool:
        return any(tag is not None and tag.name == name for tag in self._document.tags or ())

    def _error(self, error: Exception) -> None:
        logger.warning("Schema generation error: %s", error)
        self._errors.append(error)


def set_operation_by_method(item: PathItem, operation: Operation, method: str) -> None:
    """Assign an operation to the slot of an HTTP method, replacing any previous one.

    Raises:
        InvalidOperationError: If the method is not an HTTP method.
    """
    method_key = method.lower()
    if method_key not in HTTP_METHODS:
        raise InvalidOperationError(f"Unsupported HTTP method: {method!r}")
    setattr(item, method_key, operation)


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _tag_sort_key(tag: Optional[Tag]) -> tuple[bool, str]:
    if tag is None:
        return (False, "")
    return (True, tag.name)
