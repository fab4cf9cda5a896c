"""Grantable resource types."""

from enum import StrEnum


class ResourceType(StrEnum):
    """Discriminator of the resource variants."""

    CATALOG = "catalog"
    NAMESPACE = "namespace"
    TABLE = "table"
    VIEW = "view"
    POLICY = "policy"
