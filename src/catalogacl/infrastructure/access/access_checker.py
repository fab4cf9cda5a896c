"""Access checker implementation - service admins and catalog grants."""

from catalogacl.domain.value_objects import CatalogResource, Privilege


class GrantAccessChecker:
    """Authorizes management actions from configuration and stored grants."""

    def __init__(self, unit_of_work_factory: type, service_admins: frozenset[str]) -> None:
        self._uow_factory = unit_of_work_factory
        self._service_admins = service_admins

    async def is_service_admin(self, actor: str) -> bool:
        """Check if actor is a configured service admin."""
        return actor in self._service_admins

    async def can_manage_access(self, actor: str, catalog_name: str) -> bool:
        """Check if actor holds CATALOG_MANAGE_ACCESS on the catalog."""
        if await self.is_service_admin(actor):
            return True
        async with self._uow_factory() as uow:
            roles = await uow.role_graph.effective_catalog_roles(actor)
            for role in roles:
                if role.catalog_name != catalog_name:
                    continue
                grant = await uow.grants.get(
                    catalog_name,
                    role.name,
                    CatalogResource(),
                    Privilege.CATALOG_MANAGE_ACCESS,
                )
                if grant:
                    return True
        return False
