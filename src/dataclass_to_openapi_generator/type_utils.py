"""Shared helpers for inspecting type hints."""

from __future__ import annotations

import dataclasses
import types
from typing import Annotated, Any, NewType, TypeAliasType, Union, get_args, get_origin

_UNION_ORIGINS = (Union, types.UnionType)


def split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Return the bare hint and the metadata of a top-level ``Annotated``."""
    if get_origin(hint) is Annotated:
        return hint.__origin__, tuple(hint.__metadata__)
    return hint, ()


def unwrap(hint: Any) -> tuple[Any, bool]:
    """Strip ``Annotated``, aliases, ``NewType`` and ``Optional`` wrappers.

    Args:
        hint (Any): Type hint to unwrap.

    Returns:
        tuple[Any, bool]: The underlying hint and whether ``None`` was allowed
        by one of the stripped ``Optional`` layers.
    """
    nullable = False
    while True:
        if get_origin(hint) is Annotated:
            hint = hint.__origin__
            continue
        if isinstance(hint, TypeAliasType):
            hint = hint.__value__
            continue
        if isinstance(hint, NewType):
            hint = hint.__supertype__
            continue
        if get_origin(hint) in _UNION_ORIGINS:
            members = [arg for arg in get_args(hint) if arg is not types.NoneType]
            if len(members) == 1 and len(members) < len(get_args(hint)):
                hint = members[0]
                nullable = True
                continue
        return hint, nullable


def strip_optional(hint: Any) -> Any:
    """Return the hint with every wrapper removed."""
    return unwrap(hint)[0]


def struct_class(hint: Any) -> Any:
    """Return the dataclass behind a plain or parametrised dataclass hint."""
    return get_origin(hint) or hint


def is_struct(hint: Any) -> bool:
    """Return whether a (bare) hint describes a dataclass."""
    target = struct_class(hint)
    return isinstance(target, type) and dataclasses.is_dataclass(target)
