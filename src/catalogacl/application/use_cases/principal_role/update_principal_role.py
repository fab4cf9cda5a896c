"""Update principal role use case."""

import logging
from dataclasses import replace

from catalogacl.application.ports import AccessChecker
from catalogacl.application.validation import require_properties
from catalogacl.domain.entities import PrincipalRole
from catalogacl.domain.exceptions import Forbidden, NotFound

logger = logging.getLogger(__name__)


class UpdatePrincipalRoleUseCase:
    """Replace the properties of a principal role under optimistic locking."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        name: str,
        properties: dict[str, str] | None,
        expected_version: int | None = None,
    ) -> PrincipalRole:
        """Update properties; Conflict when expected_version is stale."""
        properties = require_properties(properties)
        if not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not update principal roles")

        async with self._uow_factory() as uow:
            current = await uow.principal_roles.get(name)
            if not current:
                raise NotFound("Principal role", name)
            if expected_version is None:
                logger.warning("Principal role %s updated without an entity version", name)
            updated = await uow.principal_roles.update(
                replace(current, properties=properties), expected_version
            )
        return updated
