"""Catalog role repository port."""

from typing import Protocol

from catalogacl.domain.entities import CatalogRole


class CatalogRoleRepository(Protocol):
    """Port for catalog role persistence.

    ``update``, ``delete`` and ``touch`` are compare-and-swap operations on
    the entity version: they raise Conflict when ``expected_version`` is given
    and differs from the stored version, and NotFound when the role is absent.
    """

    async def get(self, catalog_name: str, name: str) -> CatalogRole | None: ...

    async def get_for_update(self, catalog_name: str, name: str) -> CatalogRole | None: ...

    async def list_by_catalog(self, catalog_name: str) -> list[CatalogRole]: ...

    async def create(self, catalog_role: CatalogRole) -> CatalogRole: ...

    async def update(
        self, catalog_role: CatalogRole, expected_version: int | None
    ) -> CatalogRole: ...

    async def touch(self, catalog_name: str, name: str, expected_version: int) -> int: ...

    async def delete(self, catalog_name: str, name: str, expected_version: int | None) -> None: ...
