"""Pydantic models of the assembled OpenAPI document."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .json_types import MutableJSONObject

OPENAPI_VERSION = "3.0.3"
COMPONENTS_SCHEMAS_PREFIX = "#/components/schemas/"
JSON_MEDIA_TYPE = "application/json"


class DocumentModel(BaseModel):
    """Base class of every document object."""

    model_config = ConfigDict(populate_by_name=True)

    def as_dict(self) -> MutableJSONObject:
        """Return the JSON-compatible form, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Reference(DocumentModel):
    """Pointer to a named component schema."""

    ref: str = Field(alias="$ref")

    @classmethod
    def to_schema(cls, name: str) -> Reference:
        """Build a reference to the component schema called ``name``."""
        return cls(ref=f"{COMPONENTS_SCHEMAS_PREFIX}{name}")

    @property
    def schema_name(self) -> str:
        """Name of the referenced component schema."""
        return self.ref.removeprefix(COMPONENTS_SCHEMAS_PREFIX)


SchemaOrRef = Union["Schema", Reference]


class Schema(DocumentModel):
    """Structural description of a value."""

    type: Optional[str] = None
    format: Optional[str] = None
    nullable: Optional[bool] = None
    default: Any = None
    enum: Optional[list[Any]] = None
    required: Optional[list[str]] = None
    deprecated: Optional[bool] = None
    description: Optional[str] = None
    properties: Optional[dict[str, SchemaOrRef]] = None
    items: Optional[SchemaOrRef] = None
    additional_properties: Optional[SchemaOrRef] = Field(
        default=None, alias="additionalProperties"
    )


class Contact(DocumentModel):
    """Contact information of the exposed API."""

    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(DocumentModel):
    """License information of the exposed API."""

    name: str
    url: Optional[str] = None


class Info(DocumentModel):
    """Free-form metadata about the API."""

    title: str = ""
    version: str = ""
    description: Optional[str] = None
    terms_of_service: Optional[str] = Field(default=None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None


class Tag(DocumentModel):
    """Named group of operations."""

    name: str
    description: Optional[str] = None


class Parameter(DocumentModel):
    """Operation parameter bound to a path segment, query value or header."""

    name: str
    in_: str = Field(alias="in")
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    schema_: Optional[SchemaOrRef] = Field(default=None, alias="schema")


class MediaType(DocumentModel):
    """Schema of a body for one content type."""

    schema_: Optional[SchemaOrRef] = Field(default=None, alias="schema")


class RequestBody(DocumentModel):
    """Request body of an operation."""

    description: Optional[str] = None
    content: dict[str, MediaType]
    required: Optional[bool] = None


class Header(DocumentModel):
    """Response header."""

    description: Optional[str] = None
    schema_: Optional[SchemaOrRef] = Field(default=None, alias="schema")


class Response(DocumentModel):
    """Response of an operation for one status code."""

    description: str
    headers: Optional[dict[str, Header]] = None
    content: Optional[dict[str, MediaType]] = None


class Operation(DocumentModel):
    """One HTTP method of a path."""

    operation_id: Optional[str] = Field(default=None, alias="operationId")
    tags: Optional[list[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    deprecated: Optional[bool] = None
    parameters: Optional[list[Parameter]] = None
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)


class PathItem(DocumentModel):
    """Operations available on one path template."""

    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None


class Components(DocumentModel):
    """Reusable document objects."""

    schemas: dict[str, Schema] = Field(default_factory=dict)


class OpenAPI(DocumentModel):
    """Root of the assembled document."""

    openapi: str = OPENAPI_VERSION
    info: Info = Field(default_factory=Info)
    tags: Optional[list[Optional[Tag]]] = None
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)


for _model in (
    Schema,
    Parameter,
    MediaType,
    RequestBody,
    Header,
    Response,
    Operation,
    PathItem,
    Components,
    OpenAPI,
):
    _model.model_rebuild()
