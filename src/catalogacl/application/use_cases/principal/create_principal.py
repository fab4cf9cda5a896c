"""Create principal use case."""

import logging
from datetime import UTC, datetime

from catalogacl.application.ports import AccessChecker
from catalogacl.application.validation import require_name, require_properties
from catalogacl.domain.entities import Principal
from catalogacl.domain.exceptions import Forbidden
from catalogacl.domain.versioning import INITIAL_ENTITY_VERSION

logger = logging.getLogger(__name__)


class CreatePrincipalUseCase:
    """Create a principal. Actor must be a service admin."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        name: str,
        properties: dict[str, str] | None = None,
    ) -> Principal:
        """Create principal; Conflict if the name is taken."""
        name = require_name("Principal", name)
        properties = require_properties(properties)
        if not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not create principals")

        now = datetime.now(UTC)
        principal = Principal(
            name=name,
            properties=properties,
            entity_version=INITIAL_ENTITY_VERSION,
            create_timestamp=now,
            last_update_timestamp=now,
        )
        async with self._uow_factory() as uow:
            await uow.principals.create(principal)
        logger.info("Principal %s created by %s", name, actor)
        return principal
