"""Revoke principal role use case."""

import logging

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.exceptions import Forbidden, NotFound

logger = logging.getLogger(__name__)


class RevokePrincipalRoleUseCase:
    """Remove a principal role from a principal.

    Grants on catalog roles are untouched; the principal only loses the path
    to them.
    """

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor: str, principal_name: str, principal_role_name: str) -> None:
        """Revoke role from principal; NotFound when not assigned."""
        if not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not revoke principal roles")

        async with self._uow_factory() as uow:
            removed = await uow.role_graph.unassign(principal_name, principal_role_name)
            if not removed:
                raise NotFound(
                    "Principal role assignment", f"{principal_name}/{principal_role_name}"
                )
        logger.info("Principal role %s revoked from %s", principal_role_name, principal_name)
