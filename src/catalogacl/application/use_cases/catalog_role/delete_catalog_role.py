"""Delete catalog role use case."""

import logging

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.exceptions import Forbidden

logger = logging.getLogger(__name__)


class DeleteCatalogRoleUseCase:
    """Delete a catalog role, its principal role bindings and its grants."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        catalog_name: str,
        name: str,
        expected_version: int | None = None,
    ) -> None:
        """Delete catalog role. NotFound if absent, Conflict on a stale version."""
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")

        async with self._uow_factory() as uow:
            await uow.catalog_roles.delete(catalog_name, name, expected_version)
        logger.info("Catalog role %s.%s deleted by %s", catalog_name, name, actor)
