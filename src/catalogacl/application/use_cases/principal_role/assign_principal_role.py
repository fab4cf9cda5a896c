"""Assign principal role use case."""

import logging

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.exceptions import Forbidden, NotFound

logger = logging.getLogger(__name__)


class AssignPrincipalRoleUseCase:
    """Assign a principal role to a principal (idempotent)."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor: str, principal_name: str, principal_role_name: str) -> bool:
        """Assign role. Returns False when the assignment already existed."""
        if not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not assign principal roles")

        async with self._uow_factory() as uow:
            if not await uow.principals.get(principal_name):
                raise NotFound("Principal", principal_name)
            if not await uow.principal_roles.get(principal_role_name):
                raise NotFound("Principal role", principal_role_name)
            created = await uow.role_graph.assign(principal_name, principal_role_name)
        if created:
            logger.info("Principal role %s assigned to %s", principal_role_name, principal_name)
        return created
