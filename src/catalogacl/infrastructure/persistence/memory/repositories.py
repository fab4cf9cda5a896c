"""In-memory repository implementations over a unit of work's working state."""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from catalogacl.domain.entities import CatalogRole, Grant, Principal, PrincipalRole
from catalogacl.domain.exceptions import Conflict, NotFound
from catalogacl.domain.value_objects import Resource
from catalogacl.domain.versioning import check_entity_version
from catalogacl.infrastructure.persistence.memory.store import MemoryState


class MemoryPrincipalRepository:
    """Principal repository implementation."""

    def __init__(self, state: MemoryState) -> None:
        self._state = state

    async def get(self, name: str) -> Principal | None:
        principal = self._state.principals.get(name)
        return replace(principal) if principal else None

    async def list_all(self) -> list[Principal]:
        return [replace(p) for _, p in sorted(self._state.principals.items())]

    async def create(self, principal: Principal) -> Principal:
        if principal.name in self._state.principals:
            raise Conflict(f"Principal {principal.name} already exists")
        self._state.principals[principal.name] = replace(principal)
        return principal

    async def update(self, principal: Principal, expected_version: int | None) -> Principal:
        current = self._state.principals.get(principal.name)
        if not current:
            raise NotFound("Principal", principal.name)
        version = check_entity_version(
            "Principal", principal.name, current.entity_version, expected_version
        )
        stored = replace(
            principal,
            entity_version=version,
            create_timestamp=current.create_timestamp,
            last_update_timestamp=datetime.now(UTC),
        )
        self._state.principals[principal.name] = stored
        return replace(stored)

    async def delete(self, name: str, expected_version: int | None) -> None:
        current = self._state.principals.get(name)
        if not current:
            raise NotFound("Principal", name)
        check_entity_version("Principal", name, current.entity_version, expected_version)
        del self._state.principals[name]
        self._state.assignments = {a for a in self._state.assignments if a[0] != name}


class MemoryPrincipalRoleRepository:
    """Principal role repository implementation."""

    def __init__(self, state: MemoryState) -> None:
        self._state = state

    async def get(self, name: str) -> PrincipalRole | None:
        role = self._state.principal_roles.get(name)
        return replace(role) if role else None

    async def list_all(self) -> list[PrincipalRole]:
        return [replace(r) for _, r in sorted(self._state.principal_roles.items())]

    async def create(self, principal_role: PrincipalRole) -> PrincipalRole:
        if principal_role.name in self._state.principal_roles:
            raise Conflict(f"Principal role {principal_role.name} already exists")
        self._state.principal_roles[principal_role.name] = replace(principal_role)
        return principal_role

    async def update(
        self, principal_role: PrincipalRole, expected_version: int | None
    ) -> PrincipalRole:
        current = self._state.principal_roles.get(principal_role.name)
        if not current:
            raise NotFound("Principal role", principal_role.name)
        version = check_entity_version(
            "Principal role", principal_role.name, current.entity_version, expected_version
        )
        stored = replace(
            principal_role,
            entity_version=version,
            create_timestamp=current.create_timestamp,
            last_update_timestamp=datetime.now(UTC),
        )
        self._state.principal_roles[principal_role.name] = stored
        return replace(stored)

    async def delete(self, name: str, expected_version: int | None) -> None:
        current = self._state.principal_roles.get(name)
        if not current:
            raise NotFound("Principal role", name)
        check_entity_version("Principal role", name, current.entity_version, expected_version)
        del self._state.principal_roles[name]
        self._state.assignments = {a for a in self._state.assignments if a[1] != name}
        self._state.bindings = {b for b in self._state.bindings if b[0] != name}


class MemoryCatalogRoleRepository:
    """Catalog role repository implementation."""

    def __init__(self, state: MemoryState) -> None:
        self._state = state

    async def get(self, catalog_name: str, name: str) -> CatalogRole | None:
        role = self._state.catalog_roles.get((catalog_name, name))
        return replace(role) if role else None

    async def get_for_update(self, catalog_name: str, name: str) -> CatalogRole | None:
        # The unit of work already holds the store lock.
        return await self.get(catalog_name, name)

    async def list_by_catalog(self, catalog_name: str) -> list[CatalogRole]:
        return [
            replace(role)
            for (catalog, _), role in sorted(self._state.catalog_roles.items())
            if catalog == catalog_name
        ]

    async def create(self, catalog_role: CatalogRole) -> CatalogRole:
        if catalog_role.key in self._state.catalog_roles:
            raise Conflict(
                f"Catalog role {catalog_role.name} already exists in {catalog_role.catalog_name}"
            )
        self._state.catalog_roles[catalog_role.key] = replace(catalog_role)
        return catalog_role

    async def update(
        self, catalog_role: CatalogRole, expected_version: int | None
    ) -> CatalogRole:
        current = self._current(catalog_role.catalog_name, catalog_role.name)
        version = check_entity_version(
            "Catalog role", catalog_role.name, current.entity_version, expected_version
        )
        stored = replace(
            catalog_role,
            entity_version=version,
            create_timestamp=current.create_timestamp,
            last_update_timestamp=datetime.now(UTC),
        )
        self._state.catalog_roles[catalog_role.key] = stored
        return replace(stored)

    async def touch(self, catalog_name: str, name: str, expected_version: int) -> int:
        current = self._current(catalog_name, name)
        current.entity_version = check_entity_version(
            "Catalog role", name, current.entity_version, expected_version
        )
        current.last_update_timestamp = datetime.now(UTC)
        return current.entity_version

    async def delete(self, catalog_name: str, name: str, expected_version: int | None) -> None:
        current = self._current(catalog_name, name)
        check_entity_version("Catalog role", name, current.entity_version, expected_version)
        del self._state.catalog_roles[(catalog_name, name)]
        self._state.bindings = {
            b for b in self._state.bindings if (b[1], b[2]) != (catalog_name, name)
        }
        self._state.grants = {
            gid: g
            for gid, g in self._state.grants.items()
            if (g.catalog_name, g.catalog_role_name) != (catalog_name, name)
        }

    def _current(self, catalog_name: str, name: str) -> CatalogRole:
        current = self._state.catalog_roles.get((catalog_name, name))
        if not current:
            raise NotFound("Catalog role", f"{catalog_name}/{name}")
        return current


class MemoryRoleGraphRepository:
    """Role graph repository implementation."""

    def __init__(self, state: MemoryState) -> None:
        self._state = state

    async def assign(self, principal_name: str, principal_role_name: str) -> bool:
        edge = (principal_name, principal_role_name)
        if edge in self._state.assignments:
            return False
        self._state.assignments.add(edge)
        return True

    async def unassign(self, principal_name: str, principal_role_name: str) -> bool:
        edge = (principal_name, principal_role_name)
        if edge not in self._state.assignments:
            return False
        self._state.assignments.discard(edge)
        return True

    async def bind(
        self, principal_role_name: str, catalog_name: str, catalog_role_name: str
    ) -> bool:
        edge = (principal_role_name, catalog_name, catalog_role_name)
        if edge in self._state.bindings:
            return False
        self._state.bindings.add(edge)
        return True

    async def unbind(
        self, principal_role_name: str, catalog_name: str, catalog_role_name: str
    ) -> bool:
        edge = (principal_role_name, catalog_name, catalog_role_name)
        if edge not in self._state.bindings:
            return False
        self._state.bindings.discard(edge)
        return True

    async def list_principal_roles(self, principal_name: str) -> list[PrincipalRole]:
        names = sorted(r for p, r in self._state.assignments if p == principal_name)
        return [replace(self._state.principal_roles[n]) for n in names]

    async def list_principals(self, principal_role_name: str) -> list[Principal]:
        names = sorted(p for p, r in self._state.assignments if r == principal_role_name)
        return [replace(self._state.principals[n]) for n in names]

    async def list_catalog_roles(
        self, principal_role_name: str, catalog_name: str | None = None
    ) -> list[CatalogRole]:
        keys = sorted(
            (c, cr)
            for pr, c, cr in self._state.bindings
            if pr == principal_role_name and (catalog_name is None or c == catalog_name)
        )
        return [replace(self._state.catalog_roles[k]) for k in keys]

    async def list_bound_principal_roles(
        self, catalog_name: str, catalog_role_name: str
    ) -> list[PrincipalRole]:
        names = sorted(
            pr
            for pr, c, cr in self._state.bindings
            if (c, cr) == (catalog_name, catalog_role_name)
        )
        return [replace(self._state.principal_roles[n]) for n in names]

    async def effective_catalog_roles(self, principal_name: str) -> set[CatalogRole]:
        roles: set[CatalogRole] = set()
        for principal_role in await self.list_principal_roles(principal_name):
            roles.update(await self.list_catalog_roles(principal_role.name))
        return roles


class MemoryGrantRepository:
    """Grant repository implementation."""

    def __init__(self, state: MemoryState) -> None:
        self._state = state

    async def get(
        self,
        catalog_name: str,
        catalog_role_name: str,
        resource: Resource,
        privilege: str,
    ) -> Grant | None:
        key = (catalog_name, catalog_role_name, resource, privilege)
        for grant in self._state.grants.values():
            if grant.key == key:
                return replace(grant)
        return None

    async def add(self, grant: Grant) -> bool:
        if any(g.key == grant.key for g in self._state.grants.values()):
            return False
        self._state.grants[grant.id] = replace(grant)
        return True

    async def list_by_catalog_role(
        self, catalog_name: str, catalog_role_name: str
    ) -> list[Grant]:
        return [
            replace(g)
            for g in self._sorted()
            if (g.catalog_name, g.catalog_role_name) == (catalog_name, catalog_role_name)
        ]

    async def list_by_resource(self, catalog_name: str, resource: Resource) -> list[Grant]:
        return [
            replace(g)
            for g in self._sorted()
            if g.catalog_name == catalog_name and g.resource == resource
        ]

    async def delete_many(self, grant_ids: list[UUID]) -> int:
        deleted = 0
        for grant_id in grant_ids:
            if self._state.grants.pop(grant_id, None) is not None:
                deleted += 1
        return deleted

    def _sorted(self) -> list[Grant]:
        return sorted(self._state.grants.values(), key=lambda g: g.created_at)
