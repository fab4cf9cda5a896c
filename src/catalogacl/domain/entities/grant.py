"""Grant entity - privilege on a resource held by a catalog role."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from catalogacl.domain.value_objects.resource import Resource


@dataclass
class Grant:
    """Grant - the (catalog role, resource, privilege) tuple."""

    id: UUID
    catalog_name: str
    catalog_role_name: str
    resource: Resource
    privilege: str
    created_at: datetime

    @property
    def key(self) -> tuple[str, str, Resource, str]:
        """Uniqueness key of the grant."""
        return (self.catalog_name, self.catalog_role_name, self.resource, self.privilege)
