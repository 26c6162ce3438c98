"""Base error type and the errors collected while assembling a document.

Hard errors derive from ``GeneratorError`` and are declared next to the code
that raises them. ``SchemaTypeError`` and ``FieldError`` are never raised out
of the generator: they are appended to ``Generator.errors()`` and assembly
continues.
"""

from __future__ import annotations

from typing import Any, Optional


class GeneratorError(RuntimeError):
    """Base class for errors that abort a registration call."""


class SchemaTypeError(Exception):
    """A type that could not be described by a schema."""

    def __init__(self, message: str, python_type: Any) -> None:
        super().__init__(f"{message}: {python_type!r}")
        self.message = message
        self.python_type = python_type


class FieldError(Exception):
    """A struct field whose annotations could not be applied to its schema."""

    def __init__(
        self,
        message: str,
        *,
        name: str,
        python_type: Any,
        parent: Any,
        value: Optional[str] = None,
    ) -> None:
        parent_name = getattr(parent, "__qualname__", repr(parent))
        detail = f"{message}: field {name!r} of {parent_name}"
        if value is not None:
            detail = f"{detail} (value {value!r})"
        super().__init__(detail)
        self.message = message
        self.name = name
        self.python_type = python_type
        self.parent = parent
        self.value = value
