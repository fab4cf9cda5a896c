"""Repository ports."""

from catalogacl.application.ports.repositories.catalog_role_repository import (
    CatalogRoleRepository,
)
from catalogacl.application.ports.repositories.grant_repository import GrantRepository
from catalogacl.application.ports.repositories.principal_repository import (
    PrincipalRepository,
)
from catalogacl.application.ports.repositories.principal_role_repository import (
    PrincipalRoleRepository,
)
from catalogacl.application.ports.repositories.role_graph_repository import (
    RoleGraphRepository,
)

__all__ = [
    "CatalogRoleRepository",
    "GrantRepository",
    "PrincipalRepository",
    "PrincipalRoleRepository",
    "RoleGraphRepository",
]
