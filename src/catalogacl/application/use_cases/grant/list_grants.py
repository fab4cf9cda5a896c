"""List grants use case."""

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.entities import Grant
from catalogacl.domain.exceptions import Forbidden, NotFound
from catalogacl.domain.value_objects import Resource


class ListGrantsUseCase:
    """Read-only grant listings; no version requirement."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def for_catalog_role(
        self, actor: str, catalog_name: str, catalog_role_name: str
    ) -> list[Grant]:
        """Grants held by a catalog role."""
        await self._require_access(actor, catalog_name)
        async with self._uow_factory() as uow:
            if not await uow.catalog_roles.get(catalog_name, catalog_role_name):
                raise NotFound("Catalog role", f"{catalog_name}/{catalog_role_name}")
            return await uow.grants.list_by_catalog_role(catalog_name, catalog_role_name)

    async def for_resource(self, actor: str, catalog_name: str, resource: Resource) -> list[Grant]:
        """Grants on exactly this resource across all catalog roles of the catalog."""
        await self._require_access(actor, catalog_name)
        async with self._uow_factory() as uow:
            return await uow.grants.list_by_resource(catalog_name, resource)

    async def _require_access(self, actor: str, catalog_name: str) -> None:
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")
