"""Catalog role read use cases."""

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.entities import CatalogRole, PrincipalRole
from catalogacl.domain.exceptions import Forbidden, NotFound


class ReadCatalogRolesUseCase:
    """Get and list catalog roles of a catalog."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def get(self, actor: str, catalog_name: str, name: str) -> CatalogRole:
        await self._require_access(actor, catalog_name)
        async with self._uow_factory() as uow:
            role = await uow.catalog_roles.get(catalog_name, name)
        if not role:
            raise NotFound("Catalog role", f"{catalog_name}/{name}")
        return role

    async def list_by_catalog(self, actor: str, catalog_name: str) -> list[CatalogRole]:
        await self._require_access(actor, catalog_name)
        async with self._uow_factory() as uow:
            return await uow.catalog_roles.list_by_catalog(catalog_name)

    async def principal_roles(
        self, actor: str, catalog_name: str, name: str
    ) -> list[PrincipalRole]:
        """Principal roles the catalog role is bound to."""
        await self._require_access(actor, catalog_name)
        async with self._uow_factory() as uow:
            if not await uow.catalog_roles.get(catalog_name, name):
                raise NotFound("Catalog role", f"{catalog_name}/{name}")
            return await uow.role_graph.list_bound_principal_roles(catalog_name, name)

    async def _require_access(self, actor: str, catalog_name: str) -> None:
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")
