"""Dataclass to OpenAPI generator package."""

from __future__ import annotations

from .config import TONIC_CONFIG, SpecGenConfig
from .document import OpenAPI
from .errors import FieldError, GeneratorError, SchemaTypeError
from .fields import Embedded
from .generator import Generator, set_operation_by_method
from .model_types import OperationInfo, OperationResponse, ResponseHeader
from .naming import TypeNamer, rewrite_path
from .verify import validate_document

__all__ = [
    "Embedded",
    "FieldError",
    "Generator",
    "GeneratorError",
    "OpenAPI",
    "OperationInfo",
    "OperationResponse",
    "ResponseHeader",
    "SchemaTypeError",
    "SpecGenConfig",
    "TONIC_CONFIG",
    "TypeNamer",
    "rewrite_path",
    "set_operation_by_method",
    "validate_document",
]
