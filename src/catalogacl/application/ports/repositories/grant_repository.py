"""Grant repository port."""

from typing import Protocol
from uuid import UUID

from catalogacl.domain.entities import Grant
from catalogacl.domain.value_objects import Resource


class GrantRepository(Protocol):
    """Port for grant persistence."""

    async def get(
        self,
        catalog_name: str,
        catalog_role_name: str,
        resource: Resource,
        privilege: str,
    ) -> Grant | None: ...

    async def add(self, grant: Grant) -> bool: ...

    async def list_by_catalog_role(
        self, catalog_name: str, catalog_role_name: str
    ) -> list[Grant]: ...

    async def list_by_resource(self, catalog_name: str, resource: Resource) -> list[Grant]: ...

    async def delete_many(self, grant_ids: list[UUID]) -> int: ...
