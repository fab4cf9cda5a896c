"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from catalogacl.application.ports.repositories import (
    CatalogRoleRepository,
    GrantRepository,
    PrincipalRepository,
    PrincipalRoleRepository,
    RoleGraphRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def principals(self) -> PrincipalRepository: ...

    @property
    def principal_roles(self) -> PrincipalRoleRepository: ...

    @property
    def catalog_roles(self) -> CatalogRoleRepository: ...

    @property
    def role_graph(self) -> RoleGraphRepository: ...

    @property
    def grants(self) -> GrantRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
