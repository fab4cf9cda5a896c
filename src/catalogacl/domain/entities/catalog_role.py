"""Catalog role entity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(eq=False)
class CatalogRole:
    """Catalog role - scoped to one catalog, carries privilege grants."""

    catalog_name: str
    name: str
    create_timestamp: datetime
    last_update_timestamp: datetime
    properties: dict[str, str] = field(default_factory=dict)
    entity_version: int = 1

    @property
    def key(self) -> tuple[str, str]:
        """(catalog_name, name) - identity of the role."""
        return (self.catalog_name, self.name)

    def __hash__(self) -> int:
        return hash(self.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogRole):
            return NotImplemented
        return self.key == other.key
