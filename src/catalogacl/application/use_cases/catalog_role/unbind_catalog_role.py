"""Unbind catalog role from principal role use case."""

import logging

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.exceptions import Forbidden, NotFound

logger = logging.getLogger(__name__)


class UnbindCatalogRoleUseCase:
    """Remove a catalog role from a principal role.

    The catalog role keeps its grants.
    """

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        principal_role_name: str,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        """Remove binding; NotFound when it does not exist."""
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")

        async with self._uow_factory() as uow:
            removed = await uow.role_graph.unbind(
                principal_role_name, catalog_name, catalog_role_name
            )
            if not removed:
                raise NotFound(
                    "Catalog role binding",
                    f"{principal_role_name}/{catalog_name}/{catalog_role_name}",
                )
        logger.info(
            "Catalog role %s.%s unbound from principal role %s",
            catalog_name,
            catalog_role_name,
            principal_role_name,
        )
