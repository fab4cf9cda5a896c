"""In-memory store shared by memory units of work."""

import asyncio
from dataclasses import dataclass, field
from uuid import UUID

from catalogacl.domain.entities import CatalogRole, Grant, Principal, PrincipalRole


@dataclass
class MemoryState:
    """Complete state of the store; copied per unit of work."""

    principals: dict[str, Principal] = field(default_factory=dict)
    principal_roles: dict[str, PrincipalRole] = field(default_factory=dict)
    catalog_roles: dict[tuple[str, str], CatalogRole] = field(default_factory=dict)
    # (principal, principal_role)
    assignments: set[tuple[str, str]] = field(default_factory=set)
    # (principal_role, catalog, catalog_role)
    bindings: set[tuple[str, str, str]] = field(default_factory=set)
    grants: dict[UUID, Grant] = field(default_factory=dict)


class MemoryStore:
    """Process-local store; a single lock serializes units of work."""

    def __init__(self) -> None:
        self.state = MemoryState()
        self.lock = asyncio.Lock()
