"""Domain entities."""

from catalogacl.domain.entities.catalog_role import CatalogRole
from catalogacl.domain.entities.grant import Grant
from catalogacl.domain.entities.principal import Principal
from catalogacl.domain.entities.principal_role import PrincipalRole

__all__ = [
    "CatalogRole",
    "Grant",
    "Principal",
    "PrincipalRole",
]
