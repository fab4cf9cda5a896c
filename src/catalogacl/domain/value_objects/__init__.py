"""Domain value objects."""

from catalogacl.domain.value_objects.error_kind import ErrorKind
from catalogacl.domain.value_objects.privilege import Privilege, privileges_for
from catalogacl.domain.value_objects.resource import (
    CatalogResource,
    NamespaceResource,
    PolicyResource,
    Resource,
    TableResource,
    ViewResource,
    contains,
    display_name,
    path,
)
from catalogacl.domain.value_objects.resource_type import ResourceType

__all__ = [
    "CatalogResource",
    "ErrorKind",
    "NamespaceResource",
    "PolicyResource",
    "Privilege",
    "Resource",
    "ResourceType",
    "TableResource",
    "ViewResource",
    "contains",
    "display_name",
    "path",
    "privileges_for",
]
