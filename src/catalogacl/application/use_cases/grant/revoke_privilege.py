"""Revoke privilege use case."""

import logging

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.entities import Grant
from catalogacl.domain.exceptions import Forbidden, NotFound, ServerError
from catalogacl.domain.revocation import removal_set
from catalogacl.domain.value_objects import Resource, path

logger = logging.getLogger(__name__)


class RevokePrivilegeUseCase:
    """Revoke a privilege from a catalog role, optionally across a subtree.

    The removal set is computed and deleted inside one unit of work while the
    catalog role row is locked, so a revoke either removes every targeted
    grant or none of them.
    """

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
        cascade: bool = False,
        expected_version: int | None = None,
    ) -> list[Grant]:
        """Revoke and return the removed grants. NotFound if the tuple is absent."""
        if not await self._access_checker.can_manage_access(actor, catalog_name):
            raise Forbidden(f"{actor} may not manage access on catalog {catalog_name}")

        async with self._uow_factory() as uow:
            role = await uow.catalog_roles.get_for_update(catalog_name, catalog_role_name)
            if not role:
                raise NotFound("Catalog role", f"{catalog_name}/{catalog_role_name}")
            target = await uow.grants.get(catalog_name, catalog_role_name, resource, privilege)
            if not target:
                raise NotFound(
                    "Grant",
                    f"{privilege} on {resource.type} {path(resource)} "
                    f"for {catalog_name}/{catalog_role_name}",
                )
            if expected_version is not None:
                await uow.catalog_roles.touch(catalog_name, catalog_role_name, expected_version)

            role_grants = (
                await uow.grants.list_by_catalog_role(catalog_name, catalog_role_name)
                if cascade
                else []
            )
            removed = removal_set(target, role_grants, cascade)
            deleted = await uow.grants.delete_many([g.id for g in removed])
            if deleted != len(removed):
                raise ServerError(
                    f"Revoke removed {deleted} of {len(removed)} grants; rolled back"
                )
        logger.info(
            "Revoked %s on %s %s from %s.%s (cascade=%s, removed=%d)",
            privilege,
            resource.type,
            path(resource),
            catalog_name,
            catalog_role_name,
            cascade,
            len(removed),
        )
        return removed
