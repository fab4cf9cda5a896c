"""Effective catalog roles use case."""

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.entities import CatalogRole
from catalogacl.domain.exceptions import Forbidden, NotFound


class EffectiveCatalogRolesUseCase:
    """Catalog roles reachable from a principal through its principal roles."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor: str, principal_name: str) -> set[CatalogRole]:
        """Union of catalog roles bound to each principal role of the principal.

        A principal may always see its own roles; anyone else must be a
        service admin.
        """
        if actor != principal_name and not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not inspect roles of {principal_name}")

        async with self._uow_factory() as uow:
            if not await uow.principals.get(principal_name):
                raise NotFound("Principal", principal_name)
            return await uow.role_graph.effective_catalog_roles(principal_name)
