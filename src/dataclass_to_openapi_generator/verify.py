"""Check an assembled document against the OpenAPI and JSON Schema models."""

from __future__ import annotations

from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from openapi_python_client.schema import OpenAPI as OpenAPIModel
from pydantic import ValidationError

from .document import OpenAPI
from .errors import GeneratorError
from .json_types import MutableJSONObject


class DocumentValidationError(GeneratorError):
    """Raised when an assembled document fails validation."""


def validate_document(document: OpenAPI) -> MutableJSONObject:
    """Validate a document and return its JSON-compatible form.

    Raises:
        DocumentValidationError: If the document is not valid OpenAPI, or a
            component schema is not a valid JSON schema.
    """
    payload = document.as_dict()
    try:
        OpenAPIModel.model_validate(payload)
    except ValidationError as exc:
        raise DocumentValidationError(f"OpenAPI document validation failed: {exc}") from exc

    components = payload.get("components", {})
    schemas = components.get("schemas", {}) if isinstance(components, dict) else {}
    for name, schema in schemas.items():
        check_component_schema(name, schema)
    return payload


def check_component_schema(name: str, schema: MutableJSONObject) -> None:
    """Check that one component schema is a well-formed JSON schema.

    Raises:
        DocumentValidationError: If the schema is malformed.
    """
    try:
        validator_for(schema).check_schema(schema)
    except SchemaError as exc:
        raise DocumentValidationError(
            f"Component schema {name!r} is not a valid JSON schema: {exc.message}"
        ) from exc
