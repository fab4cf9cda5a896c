"""Update catalog role use case."""

import logging
from dataclasses import replace

from catalogacl.application.ports import AccessChecker
from catalogacl.application.validation import require_properties
from catalogacl.domain.entities import CatalogRole
from catalogacl.domain.exceptions import Forbidden, NotFound

logger = logging.getLogger(__name__)


class UpdateCatalogRoleUseCase:
    """Replace the properties of a catalog role under optimistic locking.

    The catalog a role belongs to never changes.
    """

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        catalog_name: str,
        name: str,
        properties: dict[str, str] | None,
        expected_version: int | None = None,
    ) -> CatalogRole:
        """Update properties; Conflict when expected_version is stale."""
        properties = require_properties(properties)
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")

        async with self._uow_factory() as uow:
            current = await uow.catalog_roles.get(catalog_name, name)
            if not current:
                raise NotFound("Catalog role", f"{catalog_name}/{name}")
            if expected_version is None:
                logger.warning(
                    "Catalog role %s.%s updated without an entity version", catalog_name, name
                )
            updated = await uow.catalog_roles.update(
                replace(current, properties=properties), expected_version
            )
        return updated
