"""Create catalog role use case."""

import logging
from datetime import UTC, datetime

from catalogacl.application.ports import AccessChecker
from catalogacl.application.validation import require_name, require_properties
from catalogacl.domain.entities import CatalogRole
from catalogacl.domain.exceptions import Forbidden
from catalogacl.domain.versioning import INITIAL_ENTITY_VERSION

logger = logging.getLogger(__name__)


class CreateCatalogRoleUseCase:
    """Create a catalog role. Actor must manage access on the catalog."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        catalog_name: str,
        name: str,
        properties: dict[str, str] | None = None,
    ) -> CatalogRole:
        """Create catalog role; Conflict if the name is taken in the catalog."""
        catalog_name = require_name("Catalog", catalog_name)
        name = require_name("Catalog role", name)
        properties = require_properties(properties)
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")

        now = datetime.now(UTC)
        catalog_role = CatalogRole(
            catalog_name=catalog_name,
            name=name,
            properties=properties,
            entity_version=INITIAL_ENTITY_VERSION,
            create_timestamp=now,
            last_update_timestamp=now,
        )
        async with self._uow_factory() as uow:
            await uow.catalog_roles.create(catalog_role)
        logger.info("Catalog role %s.%s created by %s", catalog_name, name, actor)
        return catalog_role
