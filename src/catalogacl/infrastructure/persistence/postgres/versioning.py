"""Compare-and-swap support for versioned rows."""

from psycopg import AsyncConnection

from catalogacl.domain.exceptions import NotFound
from catalogacl.domain.versioning import version_conflict

# Appended to the WHERE clause of CAS statements; takes expected_version twice.
VERSION_MATCHES = "(%s::int IS NULL OR entity_version = %s)"


async def raise_cas_miss(
    conn: AsyncConnection,
    table: str,
    where: str,
    params: tuple,
    entity: str,
    name: str,
    expected_version: int | None,
) -> None:
    """Explain a CAS statement that matched no row: NotFound or Conflict."""
    cur = await conn.execute(f"SELECT entity_version FROM {table} WHERE {where}", params)
    r = await cur.fetchone()
    if not r:
        raise NotFound(entity, name)
    raise version_conflict(entity, name, expected_version, r[0])
