"""Bind catalog role to principal role use case."""

import logging

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.exceptions import Forbidden, NotFound

logger = logging.getLogger(__name__)


class BindCatalogRoleUseCase:
    """Grant a catalog role to a principal role (idempotent)."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        principal_role_name: str,
        catalog_name: str,
        catalog_role_name: str,
    ) -> bool:
        """Bind roles. Returns False when the binding already existed."""
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")

        async with self._uow_factory() as uow:
            if not await uow.principal_roles.get(principal_role_name):
                raise NotFound("Principal role", principal_role_name)
            if not await uow.catalog_roles.get(catalog_name, catalog_role_name):
                raise NotFound("Catalog role", f"{catalog_name}/{catalog_role_name}")
            created = await uow.role_graph.bind(
                principal_role_name, catalog_name, catalog_role_name
            )
        if created:
            logger.info(
                "Catalog role %s.%s bound to principal role %s",
                catalog_name,
                catalog_role_name,
                principal_role_name,
            )
        return created
