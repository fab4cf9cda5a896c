"""PostgreSQL principal repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from catalogacl.domain.entities import Principal
from catalogacl.domain.exceptions import Conflict
from catalogacl.infrastructure.persistence.postgres.versioning import (
    VERSION_MATCHES,
    raise_cas_miss,
)

_COLUMNS = "name, properties, entity_version, create_timestamp, last_update_timestamp"


def _row_to_principal(r: tuple) -> Principal:
    return Principal(
        name=r[0],
        properties=r[1] or {},
        entity_version=r[2],
        create_timestamp=r[3],
        last_update_timestamp=r[4],
    )


class PostgresPrincipalRepository:
    """Principal repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, name: str) -> Principal | None:
        """Get principal by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM principal WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_principal(r) if r else None

    async def list_all(self) -> list[Principal]:
        """List all principals."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM principal ORDER BY name")
        rows = await cur.fetchall()
        return [_row_to_principal(r) for r in rows]

    async def create(self, principal: Principal) -> Principal:
        """Create principal; Conflict if the name exists."""
        cur = await self._conn.execute(
            f"INSERT INTO principal ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (name) DO NOTHING RETURNING name",
            (
                principal.name,
                Jsonb(principal.properties),
                principal.entity_version,
                principal.create_timestamp,
                principal.last_update_timestamp,
            ),
        )
        if not await cur.fetchone():
            raise Conflict(f"Principal {principal.name} already exists")
        return principal

    async def update(self, principal: Principal, expected_version: int | None) -> Principal:
        """Replace properties and bump the entity version in one statement."""
        cur = await self._conn.execute(
            "UPDATE principal SET properties = %s, entity_version = entity_version + 1, "
            "last_update_timestamp = now() "
            f"WHERE name = %s AND {VERSION_MATCHES} RETURNING {_COLUMNS}",
            (Jsonb(principal.properties), principal.name, expected_version, expected_version),
        )
        r = await cur.fetchone()
        if not r:
            await raise_cas_miss(
                self._conn, "principal", "name = %s", (principal.name,),
                "Principal", principal.name, expected_version,
            )
        return _row_to_principal(r)

    async def delete(self, name: str, expected_version: int | None) -> None:
        """Delete principal; assignments go with it (ON DELETE CASCADE)."""
        cur = await self._conn.execute(
            f"DELETE FROM principal WHERE name = %s AND {VERSION_MATCHES} RETURNING name",
            (name, expected_version, expected_version),
        )
        if not await cur.fetchone():
            await raise_cas_miss(
                self._conn, "principal", "name = %s", (name,),
                "Principal", name, expected_version,
            )
