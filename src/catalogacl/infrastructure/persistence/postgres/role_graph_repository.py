"""PostgreSQL role graph repository implementation."""

from psycopg import AsyncConnection

from catalogacl.domain.entities import CatalogRole, Principal, PrincipalRole
from catalogacl.infrastructure.persistence.postgres.catalog_role_repository import (
    row_to_catalog_role,
)

_ENTITY_COLUMNS = (
    "e.name, e.properties, e.entity_version, e.create_timestamp, e.last_update_timestamp"
)
_CATALOG_ROLE_COLUMNS = (
    "cr.catalog_name, cr.name, cr.properties, cr.entity_version, "
    "cr.create_timestamp, cr.last_update_timestamp"
)


def _named(cls: type, r: tuple):
    return cls(
        name=r[0],
        properties=r[1] or {},
        entity_version=r[2],
        create_timestamp=r[3],
        last_update_timestamp=r[4],
    )


class PostgresRoleGraphRepository:
    """Role graph repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def assign(self, principal_name: str, principal_role_name: str) -> bool:
        """Assign principal role to principal; False if already assigned."""
        cur = await self._conn.execute(
            "INSERT INTO principal_principal_role (principal_name, principal_role_name) "
            "VALUES (%s, %s) ON CONFLICT DO NOTHING",
            (principal_name, principal_role_name),
        )
        return cur.rowcount == 1

    async def unassign(self, principal_name: str, principal_role_name: str) -> bool:
        """Remove assignment; False if there was none."""
        cur = await self._conn.execute(
            "DELETE FROM principal_principal_role "
            "WHERE principal_name = %s AND principal_role_name = %s",
            (principal_name, principal_role_name),
        )
        return cur.rowcount == 1

    async def bind(
        self, principal_role_name: str, catalog_name: str, catalog_role_name: str
    ) -> bool:
        """Bind catalog role to principal role; False if already bound."""
        cur = await self._conn.execute(
            "INSERT INTO principal_role_catalog_role "
            "(principal_role_name, catalog_name, catalog_role_name) "
            "VALUES (%s, %s, %s) ON CONFLICT DO NOTHING",
            (principal_role_name, catalog_name, catalog_role_name),
        )
        return cur.rowcount == 1

    async def unbind(
        self, principal_role_name: str, catalog_name: str, catalog_role_name: str
    ) -> bool:
        """Remove binding; False if there was none."""
        cur = await self._conn.execute(
            "DELETE FROM principal_role_catalog_role "
            "WHERE principal_role_name = %s AND catalog_name = %s AND catalog_role_name = %s",
            (principal_role_name, catalog_name, catalog_role_name),
        )
        return cur.rowcount == 1

    async def list_principal_roles(self, principal_name: str) -> list[PrincipalRole]:
        """Principal roles assigned to a principal."""
        cur = await self._conn.execute(
            f"SELECT {_ENTITY_COLUMNS} FROM principal_role e "
            "JOIN principal_principal_role ppr ON ppr.principal_role_name = e.name "
            "WHERE ppr.principal_name = %s ORDER BY e.name",
            (principal_name,),
        )
        rows = await cur.fetchall()
        return [_named(PrincipalRole, r) for r in rows]

    async def list_principals(self, principal_role_name: str) -> list[Principal]:
        """Principals holding a principal role."""
        cur = await self._conn.execute(
            f"SELECT {_ENTITY_COLUMNS} FROM principal e "
            "JOIN principal_principal_role ppr ON ppr.principal_name = e.name "
            "WHERE ppr.principal_role_name = %s ORDER BY e.name",
            (principal_role_name,),
        )
        rows = await cur.fetchall()
        return [_named(Principal, r) for r in rows]

    async def list_catalog_roles(
        self, principal_role_name: str, catalog_name: str | None = None
    ) -> list[CatalogRole]:
        """Catalog roles bound to a principal role, optionally within one catalog."""
        cur = await self._conn.execute(
            f"SELECT {_CATALOG_ROLE_COLUMNS} FROM catalog_role cr "
            "JOIN principal_role_catalog_role b "
            "ON b.catalog_name = cr.catalog_name AND b.catalog_role_name = cr.name "
            "WHERE b.principal_role_name = %s AND (%s::text IS NULL OR cr.catalog_name = %s) "
            "ORDER BY cr.catalog_name, cr.name",
            (principal_role_name, catalog_name, catalog_name),
        )
        rows = await cur.fetchall()
        return [row_to_catalog_role(r) for r in rows]

    async def list_bound_principal_roles(
        self, catalog_name: str, catalog_role_name: str
    ) -> list[PrincipalRole]:
        """Principal roles a catalog role is bound to."""
        cur = await self._conn.execute(
            f"SELECT {_ENTITY_COLUMNS} FROM principal_role e "
            "JOIN principal_role_catalog_role b ON b.principal_role_name = e.name "
            "WHERE b.catalog_name = %s AND b.catalog_role_name = %s ORDER BY e.name",
            (catalog_name, catalog_role_name),
        )
        rows = await cur.fetchall()
        return [_named(PrincipalRole, r) for r in rows]

    async def effective_catalog_roles(self, principal_name: str) -> set[CatalogRole]:
        """Catalog roles reachable from a principal through its principal roles."""
        cur = await self._conn.execute(
            f"SELECT DISTINCT {_CATALOG_ROLE_COLUMNS} FROM principal_principal_role ppr "
            "JOIN principal_role_catalog_role b "
            "ON b.principal_role_name = ppr.principal_role_name "
            "JOIN catalog_role cr "
            "ON cr.catalog_name = b.catalog_name AND cr.name = b.catalog_role_name "
            "WHERE ppr.principal_name = %s",
            (principal_name,),
        )
        rows = await cur.fetchall()
        return {row_to_catalog_role(r) for r in rows}
