"""In-memory Unit of Work implementation."""

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from catalogacl.infrastructure.persistence.memory.repositories import (
    MemoryCatalogRoleRepository,
    MemoryGrantRepository,
    MemoryPrincipalRepository,
    MemoryPrincipalRoleRepository,
    MemoryRoleGraphRepository,
)
from catalogacl.infrastructure.persistence.memory.store import MemoryState, MemoryStore


class MemoryUnitOfWork:
    """In-memory Unit of Work - store lock held, changes staged on a copy.

    Repositories write to a private copy of the state; ``commit`` publishes
    the copy and ``rollback`` discards it, so a failed unit of work leaves
    the store untouched.
    """

    def __init__(self, store: MemoryStore) -> None:
        self._store = store
        self._working: MemoryState | None = None

    async def __aenter__(self) -> "MemoryUnitOfWork":
        await self._store.lock.acquire()
        self._begin()
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type:
            await self.rollback()
        self._store.lock.release()

    def _begin(self) -> None:
        self._working = copy.deepcopy(self._store.state)
        self._principals = MemoryPrincipalRepository(self._working)
        self._principal_roles = MemoryPrincipalRoleRepository(self._working)
        self._catalog_roles = MemoryCatalogRoleRepository(self._working)
        self._role_graph = MemoryRoleGraphRepository(self._working)
        self._grants = MemoryGrantRepository(self._working)

    @property
    def principals(self) -> MemoryPrincipalRepository:
        return self._principals

    @property
    def principal_roles(self) -> MemoryPrincipalRoleRepository:
        return self._principal_roles

    @property
    def catalog_roles(self) -> MemoryCatalogRoleRepository:
        return self._catalog_roles

    @property
    def role_graph(self) -> MemoryRoleGraphRepository:
        return self._role_graph

    @property
    def grants(self) -> MemoryGrantRepository:
        return self._grants

    async def commit(self) -> None:
        if self._working is not None:
            self._store.state = self._working
            self._begin()

    async def rollback(self) -> None:
        self._begin()


def create_memory_uow_factory(store: MemoryStore) -> object:
    """Create UnitOfWork factory (async context manager) over a memory store."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[MemoryUnitOfWork]:
        uow = MemoryUnitOfWork(store)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
