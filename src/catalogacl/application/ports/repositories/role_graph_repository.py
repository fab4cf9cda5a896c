"""Role graph repository port - principal and catalog role membership edges."""

from typing import Protocol

from catalogacl.domain.entities import CatalogRole, Principal, PrincipalRole


class RoleGraphRepository(Protocol):
    """Port for membership edges.

    Add operations return True when the edge was created and False when it
    already existed; remove operations return whether an edge was removed.
    """

    async def assign(self, principal_name: str, principal_role_name: str) -> bool: ...

    async def unassign(self, principal_name: str, principal_role_name: str) -> bool: ...

    async def bind(
        self, principal_role_name: str, catalog_name: str, catalog_role_name: str
    ) -> bool: ...

    async def unbind(
        self, principal_role_name: str, catalog_name: str, catalog_role_name: str
    ) -> bool: ...

    async def list_principal_roles(self, principal_name: str) -> list[PrincipalRole]: ...

    async def list_principals(self, principal_role_name: str) -> list[Principal]: ...

    async def list_catalog_roles(
        self, principal_role_name: str, catalog_name: str | None = None
    ) -> list[CatalogRole]: ...

    async def list_bound_principal_roles(
        self, catalog_name: str, catalog_role_name: str
    ) -> list[PrincipalRole]: ...

    async def effective_catalog_roles(self, principal_name: str) -> set[CatalogRole]: ...
