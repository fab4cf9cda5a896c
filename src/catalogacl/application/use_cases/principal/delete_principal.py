"""Delete principal use case."""

import logging

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.exceptions import Forbidden

logger = logging.getLogger(__name__)


class DeletePrincipalUseCase:
    """Delete a principal and its principal role assignments."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(self, actor: str, name: str, expected_version: int | None = None) -> None:
        """Delete principal. NotFound if absent, Conflict on a stale version."""
        if not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not delete principals")

        async with self._uow_factory() as uow:
            await uow.principals.delete(name, expected_version)
        logger.info("Principal %s deleted by %s", name, actor)
