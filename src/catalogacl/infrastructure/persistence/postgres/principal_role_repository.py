"""PostgreSQL principal role repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from catalogacl.domain.entities import PrincipalRole
from catalogacl.domain.exceptions import Conflict
from catalogacl.infrastructure.persistence.postgres.versioning import (
    VERSION_MATCHES,
    raise_cas_miss,
)

_COLUMNS = "name, properties, entity_version, create_timestamp, last_update_timestamp"


def _row_to_principal_role(r: tuple) -> PrincipalRole:
    return PrincipalRole(
        name=r[0],
        properties=r[1] or {},
        entity_version=r[2],
        create_timestamp=r[3],
        last_update_timestamp=r[4],
    )


class PostgresPrincipalRoleRepository:
    """Principal role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, name: str) -> PrincipalRole | None:
        """Get principal role by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM principal_role WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_principal_role(r) if r else None

    async def list_all(self) -> list[PrincipalRole]:
        """List all principal roles."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM principal_role ORDER BY name")
        rows = await cur.fetchall()
        return [_row_to_principal_role(r) for r in rows]

    async def create(self, principal_role: PrincipalRole) -> PrincipalRole:
        """Create principal role; Conflict if the name exists."""
        cur = await self._conn.execute(
            f"INSERT INTO principal_role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (name) DO NOTHING RETURNING name",
            (
                principal_role.name,
                Jsonb(principal_role.properties),
                principal_role.entity_version,
                principal_role.create_timestamp,
                principal_role.last_update_timestamp,
            ),
        )
        if not await cur.fetchone():
            raise Conflict(f"Principal role {principal_role.name} already exists")
        return principal_role

    async def update(
        self, principal_role: PrincipalRole, expected_version: int | None
    ) -> PrincipalRole:
        """Replace properties and bump the entity version in one statement."""
        cur = await self._conn.execute(
            "UPDATE principal_role SET properties = %s, entity_version = entity_version + 1, "
            "last_update_timestamp = now() "
            f"WHERE name = %s AND {VERSION_MATCHES} RETURNING {_COLUMNS}",
            (
                Jsonb(principal_role.properties),
                principal_role.name,
                expected_version,
                expected_version,
            ),
        )
        r = await cur.fetchone()
        if not r:
            await raise_cas_miss(
                self._conn, "principal_role", "name = %s", (principal_role.name,),
                "Principal role", principal_role.name, expected_version,
            )
        return _row_to_principal_role(r)

    async def delete(self, name: str, expected_version: int | None) -> None:
        """Delete principal role; its edges go with it (ON DELETE CASCADE)."""
        cur = await self._conn.execute(
            f"DELETE FROM principal_role WHERE name = %s AND {VERSION_MATCHES} RETURNING name",
            (name, expected_version, expected_version),
        )
        if not await cur.fetchone():
            await raise_cas_miss(
                self._conn, "principal_role", "name = %s", (name,),
                "Principal role", name, expected_version,
            )
