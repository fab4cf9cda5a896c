"""Pytest fixtures for catalogacl tests."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from catalogacl.application.use_cases.catalog_role.bind_catalog_role import (
    BindCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.create_catalog_role import (
    CreateCatalogRoleUseCase,
)
from catalogacl.application.use_cases.grant.grant_privilege import GrantPrivilegeUseCase
from catalogacl.application.use_cases.grant.revoke_privilege import RevokePrivilegeUseCase
from catalogacl.application.use_cases.principal.create_principal import CreatePrincipalUseCase
from catalogacl.application.use_cases.principal_role.assign_principal_role import (
    AssignPrincipalRoleUseCase,
)
from catalogacl.application.use_cases.principal_role.create_principal_role import (
    CreatePrincipalRoleUseCase,
)
from catalogacl.infrastructure.persistence.memory.store import MemoryStore
from catalogacl.infrastructure.persistence.memory.unit_of_work import create_memory_uow_factory

ADMIN = "root"


@pytest.fixture
def store() -> MemoryStore:
    """Fresh in-memory store for each test."""
    return MemoryStore()


@pytest.fixture
def uow_factory(store: MemoryStore):
    """Factory returning async context manager over the test's memory store."""
    return create_memory_uow_factory(store)


@pytest.fixture
def mock_access_checker():
    """AsyncMock for AccessChecker - allows everything by default."""
    mock = AsyncMock()
    mock.is_service_admin.return_value = True
    mock.can_manage_access.return_value = True
    return mock


@pytest.fixture
def denying_access_checker():
    """AsyncMock for AccessChecker - denies everything."""
    mock = AsyncMock()
    mock.is_service_admin.return_value = False
    mock.can_manage_access.return_value = False
    return mock


@pytest.fixture
def grant_privilege(uow_factory, mock_access_checker) -> GrantPrivilegeUseCase:
    return GrantPrivilegeUseCase(uow_factory, mock_access_checker)


@pytest.fixture
def revoke_privilege(uow_factory, mock_access_checker) -> RevokePrivilegeUseCase:
    return RevokePrivilegeUseCase(uow_factory, mock_access_checker)


@pytest_asyncio.fixture
async def role_graph(uow_factory, mock_access_checker) -> dict[str, str]:
    """Principal p1 -> principal role pr1 -> catalog role sales/cr1."""
    deps = {"unit_of_work_factory": uow_factory, "access_checker": mock_access_checker}
    await CreatePrincipalUseCase(**deps).execute(ADMIN, "p1")
    await CreatePrincipalRoleUseCase(**deps).execute(ADMIN, "pr1")
    await CreateCatalogRoleUseCase(**deps).execute(ADMIN, "sales", "cr1")
    await AssignPrincipalRoleUseCase(**deps).execute(ADMIN, "p1", "pr1")
    await BindCatalogRoleUseCase(**deps).execute(ADMIN, "pr1", "sales", "cr1")
    return {
        "principal": "p1",
        "principal_role": "pr1",
        "catalog": "sales",
        "catalog_role": "cr1",
    }
