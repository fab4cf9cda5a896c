"""Grant privilege use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.entities import Grant
from catalogacl.domain.exceptions import Forbidden, NotFound, ValidationError
from catalogacl.domain.value_objects import Resource, path
from catalogacl.domain.versioning import check_entity_version

logger = logging.getLogger(__name__)


class GrantPrivilegeUseCase:
    """Grant a privilege on a resource to a catalog role."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def execute(
        self,
        actor: str,
        catalog_name: str,
        catalog_role_name: str,
        resource: Resource,
        privilege: str,
        expected_version: int | None = None,
    ) -> tuple[Grant, bool]:
        """Insert the grant if absent. Returns the grant and whether it was inserted.

        With ``expected_version`` the catalog role's entity version is checked,
        and bumped in the same transaction only when a row is inserted.
        Granting an existing tuple changes nothing.
        """
        if not privilege:
            raise ValidationError("privilege must not be empty")
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")

        async with self._uow_factory() as uow:
            role = await uow.catalog_roles.get_for_update(catalog_name, catalog_role_name)
            if not role:
                raise NotFound("Catalog role", f"{catalog_name}/{catalog_role_name}")
            check_entity_version(
                "Catalog role",
                f"{catalog_name}/{catalog_role_name}",
                role.entity_version,
                expected_version,
            )

            existing = await uow.grants.get(catalog_name, catalog_role_name, resource, privilege)
            if existing:
                return existing, False

            grant = Grant(
                id=uuid4(),
                catalog_name=catalog_name,
                catalog_role_name=catalog_role_name,
                resource=resource,
                privilege=privilege,
                created_at=datetime.now(UTC),
            )
            if not await uow.grants.add(grant):
                # Inserted concurrently under the same key; return the stored row.
                stored = await uow.grants.get(catalog_name, catalog_role_name, resource, privilege)
                return stored, False
            if expected_version is not None:
                await uow.catalog_roles.touch(catalog_name, catalog_role_name, expected_version)
        logger.info(
            "Granted %s on %s %s to %s.%s",
            privilege,
            resource.type,
            path(resource),
            catalog_name,
            catalog_role_name,
        )
        return grant, True
