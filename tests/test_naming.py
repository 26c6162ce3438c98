"""Unit tests for naming helpers."""

from __future__ import annotations

import pytest

from dataclass_to_openapi_generator.naming import (
    NameRegistry,
    TypeNameError,
    class_name,
    default_type_name,
    rewrite_path,
)

from .sample_types import Catalog, Item, Pair, Y


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/test/:a", "/test/{a}"),
        ("/users/:id/posts/:post_id", "/users/{id}/posts/{post_id}"),
        ("/test/{a}", "/test/{a}"),
        ("/plain", "/plain"),
        ("/", "/"),
        ("/odd/:", "/odd/:"),
    ],
)
def test_rewrite_path(path: str, expected: str) -> None:
    """Colon placeholders become braces and other segments are kept."""
    assert rewrite_path(path) == expected
    assert rewrite_path(expected) == expected


def test_rewrite_path_with_custom_marker() -> None:
    """The placeholder marker is configurable."""
    assert rewrite_path("/files/*name", marker="*") == "/files/{name}"


def test_class_name() -> None:
    """Module segments are converted to PascalCase."""
    assert class_name("sample_types") == "SampleTypes"
    assert class_name("openapi") == "Openapi"


def test_default_type_name() -> None:
    """Full names carry the module and the enclosing classes."""
    assert default_type_name(Y, full=True) == "SampleTypesY"
    assert default_type_name(Y, full=False) == "Y"
    assert default_type_name(Catalog.Item, full=True) == "SampleTypesCatalogItem"
    assert default_type_name(Catalog.Item, full=False) == "Item"
    assert default_type_name(Pair[int], full=True) == ""
    assert default_type_name(list[int], full=False) == ""


def test_default_type_name_drops_local_scopes() -> None:
    """Classes defined in functions are named after the class alone."""

    class Local:
        pass

    assert default_type_name(Local, full=True) == "TestNamingLocal"


def test_name_registry_claims_unique_names() -> None:
    """A name belongs to one type and collisions get a counter."""
    registry = NameRegistry()

    assert registry.claim(Item, "Item") == "Item"
    assert registry.claim(Catalog.Item, "Item") == "Item2"
    assert registry.claim(Item, "Item") == "Item"
    assert registry.assigned(Catalog.Item) == "Item2"
    assert registry.assigned(Y) is None


def test_name_registry_overrides() -> None:
    """Overrides are idempotent and cannot steal or change names."""
    registry = NameRegistry()
    registry.override(Y, "Why")
    registry.override(Y, "Why")

    assert registry.overridden(Y) == "Why"
    with pytest.raises(TypeNameError):
        registry.override(Y, "Other")
    with pytest.raises(TypeNameError):
        registry.override(Item, "Why")
    with pytest.raises(TypeNameError):
        registry.override(Item, "")
    assert registry.claim(Item, "Why") == "Why2"
