"""Grantable resource addresses and subtree containment.

A resource is one of five variants: the catalog itself, a namespace (possibly
the root namespace), or a table, view or policy inside a namespace. The
variants form a closed union; every function here matches on all of them.
"""

from dataclasses import dataclass, field
from typing import assert_never

from catalogacl.domain.value_objects.resource_type import ResourceType


def _segments(value: object) -> tuple[str, ...]:
    segments = tuple(value)  # type: ignore[arg-type]
    for segment in segments:
        if not isinstance(segment, str) or not segment:
            raise ValueError("Namespace segments must be non-empty strings")
    return segments


def _leaf(name: str, label: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError(f"{label} must be a non-empty string")


@dataclass(frozen=True)
class CatalogResource:
    """The catalog as a whole."""

    type: ResourceType = field(default=ResourceType.CATALOG, init=False)


@dataclass(frozen=True)
class NamespaceResource:
    """A namespace; an empty path is the root namespace."""

    namespace: tuple[str, ...] = ()
    type: ResourceType = field(default=ResourceType.NAMESPACE, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespace", _segments(self.namespace))


@dataclass(frozen=True)
class TableResource:
    """A table inside a namespace."""

    namespace: tuple[str, ...]
    table_name: str
    type: ResourceType = field(default=ResourceType.TABLE, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespace", _segments(self.namespace))
        _leaf(self.table_name, "tableName")


@dataclass(frozen=True)
class ViewResource:
    """A view inside a namespace."""

    namespace: tuple[str, ...]
    view_name: str
    type: ResourceType = field(default=ResourceType.VIEW, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespace", _segments(self.namespace))
        _leaf(self.view_name, "viewName")


@dataclass(frozen=True)
class PolicyResource:
    """A policy inside a namespace."""

    namespace: tuple[str, ...]
    policy_name: str
    type: ResourceType = field(default=ResourceType.POLICY, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespace", _segments(self.namespace))
        _leaf(self.policy_name, "policyName")


Resource = CatalogResource | NamespaceResource | TableResource | ViewResource | PolicyResource


def leaf_name(resource: Resource) -> str | None:
    """Table, view or policy name; None for catalog and namespace."""
    match resource:
        case CatalogResource() | NamespaceResource():
            return None
        case TableResource(table_name=name) | ViewResource(view_name=name) | PolicyResource(
            policy_name=name
        ):
            return name
        case _:
            assert_never(resource)


def namespace_of(resource: Resource) -> tuple[str, ...]:
    """Namespace segments of the resource; empty for the catalog."""
    match resource:
        case CatalogResource():
            return ()
        case NamespaceResource() | TableResource() | ViewResource() | PolicyResource():
            return resource.namespace
        case _:
            assert_never(resource)


def path(resource: Resource) -> str:
    """Canonical textual path of a resource."""
    match resource:
        case CatalogResource():
            return "(catalog)"
        case NamespaceResource(namespace=ns):
            return ".".join(ns) if ns else "(root)"
        case TableResource() | ViewResource() | PolicyResource():
            name = leaf_name(resource)
            if resource.namespace:
                return f"{'.'.join(resource.namespace)}.{name}"
            return name
        case _:
            assert_never(resource)


def display_name(resource: Resource) -> str:
    """Short label: the kind for catalog/namespace, the leaf name otherwise."""
    match resource:
        case CatalogResource():
            return "Catalog"
        case NamespaceResource():
            return "Namespace"
        case TableResource() | ViewResource() | PolicyResource():
            return leaf_name(resource)
        case _:
            assert_never(resource)


def contains(ancestor: Resource, descendant: Resource) -> bool:
    """True when descendant lies in the subtree rooted at ancestor.

    The catalog contains every resource of the catalog, a namespace contains
    itself, its sub-namespaces and every leaf beneath them. Tables, views and
    policies contain nothing.
    """
    match ancestor:
        case CatalogResource():
            return True
        case NamespaceResource(namespace=prefix):
            if isinstance(descendant, CatalogResource):
                return False
            segments = namespace_of(descendant)
            return segments[: len(prefix)] == prefix
        case TableResource() | ViewResource() | PolicyResource():
            return False
        case _:
            assert_never(ancestor)
