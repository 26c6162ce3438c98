"""Naming helpers for schema components and path templates."""

from __future__ import annotations

import keyword
import re
from typing import Any, Optional, Protocol, runtime_checkable

from .errors import GeneratorError
from .type_utils import strip_optional

HTTP_METHODS: tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)

_IDENTIFIER_SANITIZE_RE = re.compile(r"[^0-9a-zA-Z_]+")
_MULTIPLE_UNDERSCORES_RE = re.compile(r"_+")
_LOCALS_MARKER = "<locals>."


class TypeNameError(GeneratorError):
    """Raised when a type name override cannot be registered."""


@runtime_checkable
class TypeNamer(Protocol):
    """Capability of a class that chooses its own schema name."""

    @classmethod
    def type_name(cls) -> str:
        """Return the schema component name of the class."""
        ...


def sanitize_identifier(raw: str, *, lowercase: bool = True) -> str:
    """Convert arbitrary text into a valid Python identifier."""
    text = raw.lower() if lowercase else raw
    text = _IDENTIFIER_SANITIZE_RE.sub("_", text)
    text = _MULTIPLE_UNDERSCORES_RE.sub("_", text).strip("_")
    if not text:
        text = "root"
    if text[0].isdigit():
        text = f"x_{text}"
    if keyword.iskeyword(text):
        text = f"{text}_"
    return text


def class_name(raw: str) -> str:
    """Convert a name to PascalCase class name."""
    clean = sanitize_identifier(raw)
    return "".join(part.capitalize() for part in clean.split("_") if part) or "Model"


def default_type_name(python_type: Any, *, full: bool) -> str:
    """Derive a component name from a class and its defining scope.

    Args:
        python_type (Any): Type to name. Optional wrappers are ignored.
        full (bool): Whether to prefix the name with its module.

    Returns:
        str: The derived name, or an empty string for anonymous types.
    """
    target = strip_optional(python_type)
    if not isinstance(target, type) or not target.__name__:
        return ""
    if not full:
        return target.__name__

    qualname = target.__qualname__.rsplit(_LOCALS_MARKER, maxsplit=1)[-1]
    scope = "".join(part[:1].upper() + part[1:] for part in qualname.split(".") if part)
    module = target.__module__.rsplit(".", maxsplit=1)[-1]
    return f"{class_name(module)}{scope}"


def rewrite_path(path: str, *, marker: str = ":") -> str:
    """Rewrite ``/users/:id`` style placeholders to ``/users/{id}``."""
    segments = path.split("/")
    rewritten: list[str] = []
    for segment in segments:
        if segment.startswith(marker) and len(segment) > len(marker):
            segment = f"{{{segment[len(marker):]}}}"
        rewritten.append(segment)
    return "/".join(rewritten)


class NameRegistry:
    """Track which type owns which schema name."""

    def __init__(self) -> None:
        self._overrides: dict[Any, str] = {}
        self._assigned: dict[Any, str] = {}
        self._owners: dict[str, Any] = {}

    def override(self, python_type: Any, name: str) -> None:
        """Register an explicit name for a type.

        Raises:
            TypeNameError: If the name is empty, the type is already named
                differently, or another type owns the name.
        """
        if not name:
            raise TypeNameError(f"Type name override for {python_type!r} must not be empty")
        target = strip_optional(python_type)
        current = self._overrides.get(target) or self._assigned.get(target)
        if current is not None and current != name:
            raise TypeNameError(f"Type {target!r} is already named {current!r}")
        owner = self._owners.get(name)
        if owner is not None and owner != target:
            raise TypeNameError(f"Type name {name!r} is already used by {owner!r}")
        self._overrides[target] = name
        self._owners[name] = target

    def overridden(self, python_type: Any) -> Optional[str]:
        """Return the override registered for a type, if any."""
        return self._overrides.get(strip_optional(python_type))

    def assigned(self, python_type: Any) -> Optional[str]:
        """Return the component name a type was registered under, if any."""
        return self._assigned.get(python_type)

    def claim(self, python_type: Any, name: str) -> str:
        """Assign a unique component name to a type and return it."""
        candidate = name
        counter = 1
        while True:
            owner = self._owners.get(candidate)
            if owner is None or owner == python_type:
                break
            counter += 1
            candidate = f"{name}{counter}"
        self._owners[candidate] = python_type
        self._assigned[python_type] = candidate
        return candidate
