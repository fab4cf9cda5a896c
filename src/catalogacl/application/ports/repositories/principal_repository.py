"""Principal repository port."""

from typing import Protocol

from catalogacl.domain.entities import Principal


class PrincipalRepository(Protocol):
    """Port for principal persistence."""

    async def get(self, name: str) -> Principal | None: ...

    async def list_all(self) -> list[Principal]: ...

    async def create(self, principal: Principal) -> Principal: ...

    async def update(self, principal: Principal, expected_version: int | None) -> Principal: ...

    async def delete(self, name: str, expected_version: int | None) -> None: ...
