"""Principal read use cases."""

from catalogacl.application.ports import AccessChecker
from catalogacl.domain.entities import Principal, PrincipalRole
from catalogacl.domain.exceptions import Forbidden, NotFound


class ReadPrincipalsUseCase:
    """Get and list principals. A principal may always read itself."""

    def __init__(self, unit_of_work_factory: type, access_checker: AccessChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_checker = access_checker

    async def get(self, actor: str, name: str) -> Principal:
        """Get principal by name."""
        await self._require_self_or_admin(actor, name)
        async with self._uow_factory() as uow:
            principal = await uow.principals.get(name)
        if not principal:
            raise NotFound("Principal", name)
        return principal

    async def list_all(self, actor: str) -> list[Principal]:
        """All principals, ordered by name."""
        if not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not list principals")
        async with self._uow_factory() as uow:
            return await uow.principals.list_all()

    async def principal_roles(self, actor: str, name: str) -> list[PrincipalRole]:
        """Principal roles assigned to the principal."""
        await self._require_self_or_admin(actor, name)
        async with self._uow_factory() as uow:
            if not await uow.principals.get(name):
                raise NotFound("Principal", name)
            return await uow.role_graph.list_principal_roles(name)

    async def _require_self_or_admin(self, actor: str, name: str) -> None:
        if actor != name and not await self._access_checker.is_service_admin(actor):
            raise Forbidden(f"{actor} may not read principal {name}")
