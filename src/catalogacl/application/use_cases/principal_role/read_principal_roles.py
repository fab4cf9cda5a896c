"""Principal role read use cases."""

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.entities import CatalogRole, Principal, PrincipalRole
from catalogacl.domain.exceptions import Forbidden, NotFound


class ReadPrincipalRolesUseCase:
    """Get and list principal roles and their edges. Service admins only."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def get(self, actor: str, name: str) -> PrincipalRole:
        await self._require_admin(actor)
        async with self._uow_factory() as uow:
            role = await uow.principal_roles.get(name)
        if not role:
            raise NotFound("Principal role", name)
        return role

    async def list_all(self, actor: str) -> list[PrincipalRole]:
        await self._require_admin(actor)
        async with self._uow_factory() as uow:
            return await uow.principal_roles.list_all()

    async def principals(self, actor: str, name: str) -> list[Principal]:
        """Principals holding the role."""
        await self._require_admin(actor)
        async with self._uow_factory() as uow:
            if not await uow.principal_roles.get(name):
                raise NotFound("Principal role", name)
            return await uow.role_graph.list_principals(name)

    async def catalog_roles(self, actor: str, name: str, catalog_name: str) -> list[CatalogRole]:
        """Catalog roles of one catalog bound to the role."""
        await self._require_admin(actor)
        async with self._uow_factory() as uow:
            if not await uow.principal_roles.get(name):
                raise NotFound("Principal role", name)
            return await uow.role_graph.list_catalog_roles(name, catalog_name)

    async def _require_admin(self, actor: str) -> None:
        if not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not read principal roles")
