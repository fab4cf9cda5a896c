"""PostgreSQL catalog role repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from catalogacl.domain.entities import CatalogRole
from catalogacl.domain.exceptions import Conflict
from catalogacl.infrastructure.persistence.postgres.versioning import (
    VERSION_MATCHES,
    raise_cas_miss,
)

COLUMNS = (
    "catalog_name, name, properties, entity_version, create_timestamp, last_update_timestamp"
)
_KEY = "catalog_name = %s AND name = %s"


def row_to_catalog_role(r: tuple) -> CatalogRole:
    """Map a catalog_role row (COLUMNS order) to the entity."""
    return CatalogRole(
        catalog_name=r[0],
        name=r[1],
        properties=r[2] or {},
        entity_version=r[3],
        create_timestamp=r[4],
        last_update_timestamp=r[5],
    )


class PostgresCatalogRoleRepository:
    """Catalog role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, catalog_name: str, name: str) -> CatalogRole | None:
        """Get catalog role."""
        cur = await self._conn.execute(
            f"SELECT {COLUMNS} FROM catalog_role WHERE {_KEY}",
            (catalog_name, name),
        )
        r = await cur.fetchone()
        return row_to_catalog_role(r) if r else None

    async def get_for_update(self, catalog_name: str, name: str) -> CatalogRole | None:
        """Get catalog role and lock its row until the transaction ends."""
        cur = await self._conn.execute(
            f"SELECT {COLUMNS} FROM catalog_role WHERE {_KEY} FOR UPDATE",
            (catalog_name, name),
        )
        r = await cur.fetchone()
        return row_to_catalog_role(r) if r else None

    async def list_by_catalog(self, catalog_name: str) -> list[CatalogRole]:
        """List catalog roles of a catalog."""
        cur = await self._conn.execute(
            f"SELECT {COLUMNS} FROM catalog_role WHERE catalog_name = %s ORDER BY name",
            (catalog_name,),
        )
        rows = await cur.fetchall()
        return [row_to_catalog_role(r) for r in rows]

    async def create(self, catalog_role: CatalogRole) -> CatalogRole:
        """Create catalog role; Conflict if the name exists in the catalog."""
        cur = await self._conn.execute(
            f"INSERT INTO catalog_role ({COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (catalog_name, name) DO NOTHING RETURNING name",
            (
                catalog_role.catalog_name,
                catalog_role.name,
                Jsonb(catalog_role.properties),
                catalog_role.entity_version,
                catalog_role.create_timestamp,
                catalog_role.last_update_timestamp,
            ),
        )
        if not await cur.fetchone():
            raise Conflict(
                f"Catalog role {catalog_role.name} already exists in {catalog_role.catalog_name}"
            )
        return catalog_role

    async def update(
        self, catalog_role: CatalogRole, expected_version: int | None
    ) -> CatalogRole:
        """Replace properties and bump the entity version in one statement."""
        cur = await self._conn.execute(
            "UPDATE catalog_role SET properties = %s, entity_version = entity_version + 1, "
            "last_update_timestamp = now() "
            f"WHERE {_KEY} AND {VERSION_MATCHES} RETURNING {COLUMNS}",
            (
                Jsonb(catalog_role.properties),
                catalog_role.catalog_name,
                catalog_role.name,
                expected_version,
                expected_version,
            ),
        )
        r = await cur.fetchone()
        if not r:
            await self._raise_miss(catalog_role.catalog_name, catalog_role.name, expected_version)
        return row_to_catalog_role(r)

    async def touch(self, catalog_name: str, name: str, expected_version: int) -> int:
        """Check and bump the entity version without changing properties."""
        cur = await self._conn.execute(
            "UPDATE catalog_role SET entity_version = entity_version + 1, "
            "last_update_timestamp = now() "
            f"WHERE {_KEY} AND {VERSION_MATCHES} RETURNING entity_version",
            (catalog_name, name, expected_version, expected_version),
        )
        r = await cur.fetchone()
        if not r:
            await self._raise_miss(catalog_name, name, expected_version)
        return r[0]

    async def delete(self, catalog_name: str, name: str, expected_version: int | None) -> None:
        """Delete catalog role; bindings and grants go with it (ON DELETE CASCADE)."""
        cur = await self._conn.execute(
            f"DELETE FROM catalog_role WHERE {_KEY} AND {VERSION_MATCHES} RETURNING name",
            (catalog_name, name, expected_version, expected_version),
        )
        if not await cur.fetchone():
            await self._raise_miss(catalog_name, name, expected_version)

    async def _raise_miss(
        self, catalog_name: str, name: str, expected_version: int | None
    ) -> None:
        await raise_cas_miss(
            self._conn,
            "catalog_role",
            _KEY,
            (catalog_name, name),
            "Catalog role",
            f"{catalog_name}/{name}",
            expected_version,
        )
