"""PostgreSQL grant repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from catalogacl.domain.entities import Grant
from catalogacl.domain.value_objects import (
    CatalogResource,
    NamespaceResource,
    PolicyResource,
    Resource,
    ResourceType,
    TableResource,
    ViewResource,
)
from catalogacl.domain.value_objects.resource import leaf_name, namespace_of

_COLUMNS = (
    "id, catalog_name, catalog_role_name, resource_type, namespace, leaf_name, "
    "privilege, created_at"
)
_RESOURCE_MATCH = "resource_type = %s AND namespace = %s AND leaf_name = %s"


def resource_columns(resource: Resource) -> tuple[str, list[str], str]:
    """(resource_type, namespace, leaf_name) column values; leaf is '' when absent."""
    return (str(resource.type), list(namespace_of(resource)), leaf_name(resource) or "")


def resource_from_columns(resource_type: str, namespace: list[str], leaf: str) -> Resource:
    """Rebuild a resource from its stored columns."""
    match ResourceType(resource_type):
        case ResourceType.CATALOG:
            return CatalogResource()
        case ResourceType.NAMESPACE:
            return NamespaceResource(tuple(namespace))
        case ResourceType.TABLE:
            return TableResource(tuple(namespace), leaf)
        case ResourceType.VIEW:
            return ViewResource(tuple(namespace), leaf)
        case ResourceType.POLICY:
            return PolicyResource(tuple(namespace), leaf)


def _row_to_grant(r: tuple) -> Grant:
    return Grant(
        id=r[0],
        catalog_name=r[1],
        catalog_role_name=r[2],
        resource=resource_from_columns(r[3], r[4] or [], r[5]),
        privilege=r[6],
        created_at=r[7],
    )


class PostgresGrantRepository:
    """Grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(
        self,
        catalog_name: str,
        catalog_role_name: str,
        resource: Resource,
        privilege: str,
    ) -> Grant | None:
        """Get the grant for an exact tuple."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM grant_record "
            f"WHERE catalog_name = %s AND catalog_role_name = %s AND {_RESOURCE_MATCH} "
            "AND privilege = %s",
            (catalog_name, catalog_role_name, *resource_columns(resource), privilege),
        )
        r = await cur.fetchone()
        return _row_to_grant(r) if r else None

    async def add(self, grant: Grant) -> bool:
        """Insert grant; False if the tuple already exists."""
        cur = await self._conn.execute(
            f"INSERT INTO grant_record ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT DO NOTHING",
            (
                grant.id,
                grant.catalog_name,
                grant.catalog_role_name,
                *resource_columns(grant.resource),
                grant.privilege,
                grant.created_at,
            ),
        )
        return cur.rowcount == 1

    async def list_by_catalog_role(
        self, catalog_name: str, catalog_role_name: str
    ) -> list[Grant]:
        """List grants held by a catalog role."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM grant_record "
            "WHERE catalog_name = %s AND catalog_role_name = %s ORDER BY created_at",
            (catalog_name, catalog_role_name),
        )
        rows = await cur.fetchall()
        return [_row_to_grant(r) for r in rows]

    async def list_by_resource(self, catalog_name: str, resource: Resource) -> list[Grant]:
        """List grants on exactly this resource."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM grant_record "
            f"WHERE catalog_name = %s AND {_RESOURCE_MATCH} ORDER BY created_at",
            (catalog_name, *resource_columns(resource)),
        )
        rows = await cur.fetchall()
        return [_row_to_grant(r) for r in rows]

    async def delete_many(self, grant_ids: list[UUID]) -> int:
        """Delete grants by id; returns the number removed."""
        if not grant_ids:
            return 0
        cur = await self._conn.execute(
            "DELETE FROM grant_record WHERE id = ANY(%s)",
            (grant_ids,),
        )
        return cur.rowcount
