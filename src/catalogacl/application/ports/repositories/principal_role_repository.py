"""Principal role repository port."""

from typing import Protocol

from catalogacl.domain.entities import PrincipalRole


class PrincipalRoleRepository(Protocol):
    """Port for principal role persistence."""

    async def get(self, name: str) -> PrincipalRole | None: ...

    async def list_all(self) -> list[PrincipalRole]: ...

    async def create(self, principal_role: PrincipalRole) -> PrincipalRole: ...

    async def update(
        self, principal_role: PrincipalRole, expected_version: int | None
    ) -> PrincipalRole: ...

    async def delete(self, name: str, expected_version: int | None) -> None: ...
