"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from catalogacl.domain.exceptions import CatalogAclError, ServerError, Unavailable
from catalogacl.infrastructure.persistence.postgres.catalog_role_repository import (
    PostgresCatalogRoleRepository,
)
from catalogacl.infrastructure.persistence.postgres.grant_repository import (
    PostgresGrantRepository,
)
from catalogacl.infrastructure.persistence.postgres.principal_repository import (
    PostgresPrincipalRepository,
)
from catalogacl.infrastructure.persistence.postgres.principal_role_repository import (
    PostgresPrincipalRoleRepository,
)
from catalogacl.infrastructure.persistence.postgres.role_graph_repository import (
    PostgresRoleGraphRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: psycopg.AsyncConnection | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._principals = PostgresPrincipalRepository(self._conn)
        self._principal_roles = PostgresPrincipalRoleRepository(self._conn)
        self._catalog_roles = PostgresCatalogRoleRepository(self._conn)
        self._role_graph = PostgresRoleGraphRepository(self._conn)
        self._grants = PostgresGrantRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def principals(self) -> PostgresPrincipalRepository:
        return self._principals

    @property
    def principal_roles(self) -> PostgresPrincipalRoleRepository:
        return self._principal_roles

    @property
    def catalog_roles(self) -> PostgresCatalogRoleRepository:
        return self._catalog_roles

    @property
    def role_graph(self) -> PostgresRoleGraphRepository:
        return self._role_graph

    @property
    def grants(self) -> PostgresGrantRepository:
        return self._grants

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if not self._conn or self._conn.closed:
            return
        try:
            await self._conn.rollback()
        except psycopg.Error:
            # The pool discards a connection left in a bad state.
            logger.warning("Rollback failed; connection returned to pool as broken", exc_info=True)


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Driver failures surface as domain errors after rollback: connection
    problems as Unavailable, anything else from psycopg as ServerError.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except CatalogAclError:
            raise
        except psycopg.OperationalError as e:
            logger.error("Database unavailable: %s", e)
            raise Unavailable("The database is unavailable") from e
        except psycopg.Error as e:
            logger.error("Database error: %s", e)
            raise ServerError("The database rejected the operation") from e

    return factory
