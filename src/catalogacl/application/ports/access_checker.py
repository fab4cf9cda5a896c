"""Access checker port - who may administer principals, roles and grants."""

from typing import Protocol


class AccessChecker(Protocol):
    """Port for authorizing management actions."""

    async def is_service_admin(self, actor: str) -> bool: ...

    async def can_manage_access(self, actor: str, catalog_name: str) -> bool: ...
