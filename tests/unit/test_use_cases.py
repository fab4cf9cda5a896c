"""Unit tests for use cases over the in-memory store."""

import asyncio

import pytest

from catalogacl.application.use_cases.catalog_role.create_catalog_role import (
    CreateCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.delete_catalog_role import (
    DeleteCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.effective_catalog_roles import (
    EffectiveCatalogRolesUseCase,
)
from catalogacl.application.use_cases.catalog_role.unbind_catalog_role import (
    UnbindCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.update_catalog_role import (
    UpdateCatalogRoleUseCase,
)
from catalogacl.application.use_cases.grant.list_grants import ListGrantsUseCase
from catalogacl.application.use_cases.principal.create_principal import CreatePrincipalUseCase
from catalogacl.application.use_cases.principal.delete_principal import DeletePrincipalUseCase
from catalogacl.application.use_cases.principal.read_principals import ReadPrincipalsUseCase
from catalogacl.application.use_cases.principal.update_principal import UpdatePrincipalUseCase
from catalogacl.application.use_cases.principal_role.delete_principal_role import (
    DeletePrincipalRoleUseCase,
)
from catalogacl.application.use_cases.principal_role.revoke_principal_role import (
    RevokePrincipalRoleUseCase,
)
from catalogacl.domain.exceptions import Conflict, Forbidden, NotFound, ValidationError
from catalogacl.domain.value_objects import (
    CatalogResource,
    NamespaceResource,
    TableResource,
    ViewResource,
)

ADMIN = "root"
NS_AB = NamespaceResource(("a", "b"))
TABLE_ABT = TableResource(("a", "b"), "t")


def _deps(uow_factory, access_checker) -> dict:
    return {"unit_of_work_factory": uow_factory, "access_checker": access_checker}


# --- Principals ---


@pytest.mark.asyncio
async def test_create_principal_starts_at_version_one(uow_factory, mock_access_checker) -> None:
    principal = await CreatePrincipalUseCase(**_deps(uow_factory, mock_access_checker)).execute(
        ADMIN, "alice", {"team": "data"}
    )
    assert principal.entity_version == 1
    assert principal.properties == {"team": "data"}


@pytest.mark.asyncio
async def test_create_duplicate_principal_conflicts(uow_factory, mock_access_checker) -> None:
    create = CreatePrincipalUseCase(**_deps(uow_factory, mock_access_checker))
    await create.execute(ADMIN, "alice")
    with pytest.raises(Conflict, match="already exists"):
        await create.execute(ADMIN, "alice")


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "x" * 257])
async def test_create_principal_rejects_bad_names(
    uow_factory, mock_access_checker, name: str
) -> None:
    with pytest.raises(ValidationError):
        await CreatePrincipalUseCase(**_deps(uow_factory, mock_access_checker)).execute(
            ADMIN, name
        )


@pytest.mark.asyncio
async def test_create_principal_requires_service_admin(
    uow_factory, denying_access_checker
) -> None:
    with pytest.raises(Forbidden):
        await CreatePrincipalUseCase(**_deps(uow_factory, denying_access_checker)).execute(
            "mallory", "alice"
        )


@pytest.mark.asyncio
async def test_update_with_current_version_bumps_then_stale_conflicts(
    uow_factory, mock_access_checker
) -> None:
    """A write carrying version v yields v+1; repeating it with v is a Conflict."""
    deps = _deps(uow_factory, mock_access_checker)
    await CreatePrincipalUseCase(**deps).execute(ADMIN, "alice")
    update = UpdatePrincipalUseCase(**deps)

    updated = await update.execute(ADMIN, "alice", {"k": "v"}, expected_version=1)
    assert updated.entity_version == 2
    assert updated.properties == {"k": "v"}

    with pytest.raises(Conflict):
        await update.execute(ADMIN, "alice", {"k": "w"}, expected_version=1)
    stored = await ReadPrincipalsUseCase(**deps).get(ADMIN, "alice")
    assert stored.properties == {"k": "v"}
    assert stored.entity_version == 2


@pytest.mark.asyncio
async def test_update_without_version_is_relaxed(uow_factory, mock_access_checker) -> None:
    deps = _deps(uow_factory, mock_access_checker)
    await CreatePrincipalUseCase(**deps).execute(ADMIN, "alice")
    update = UpdatePrincipalUseCase(**deps)
    await update.execute(ADMIN, "alice", {"a": "1"})
    updated = await update.execute(ADMIN, "alice", {"a": "2"})
    assert updated.entity_version == 3


@pytest.mark.asyncio
async def test_concurrent_updates_with_same_version_one_wins(
    uow_factory, mock_access_checker
) -> None:
    deps = _deps(uow_factory, mock_access_checker)
    await CreatePrincipalUseCase(**deps).execute(ADMIN, "alice")
    update = UpdatePrincipalUseCase(**deps)

    results = await asyncio.gather(
        update.execute(ADMIN, "alice", {"w": "1"}, expected_version=1),
        update.execute(ADMIN, "alice", {"w": "2"}, expected_version=1),
        return_exceptions=True,
    )
    conflicts = [r for r in results if isinstance(r, Conflict)]
    successes = [r for r in results if not isinstance(r, BaseException)]
    assert len(conflicts) == 1
    assert len(successes) == 1
    assert successes[0].entity_version == 2


@pytest.mark.asyncio
async def test_update_missing_principal_not_found(uow_factory, mock_access_checker) -> None:
    with pytest.raises(NotFound):
        await UpdatePrincipalUseCase(**_deps(uow_factory, mock_access_checker)).execute(
            ADMIN, "ghost", {}, expected_version=1
        )


@pytest.mark.asyncio
async def test_delete_principal_removes_memberships(
    uow_factory, mock_access_checker, role_graph
) -> None:
    deps = _deps(uow_factory, mock_access_checker)
    with pytest.raises(Conflict):
        await DeletePrincipalUseCase(**deps).execute(ADMIN, "p1", expected_version=7)
    await DeletePrincipalUseCase(**deps).execute(ADMIN, "p1", expected_version=1)

    await CreatePrincipalUseCase(**deps).execute(ADMIN, "p1")
    roles = await EffectiveCatalogRolesUseCase(**deps).execute(ADMIN, "p1")
    assert roles == set()


# --- Role graph ---


@pytest.mark.asyncio
async def test_effective_catalog_roles(uow_factory, mock_access_checker, role_graph) -> None:
    roles = await EffectiveCatalogRolesUseCase(
        **_deps(uow_factory, mock_access_checker)
    ).execute("p1", "p1")
    assert {r.key for r in roles} == {("sales", "cr1")}


@pytest.mark.asyncio
async def test_effective_catalog_roles_of_others_requires_admin(
    uow_factory, denying_access_checker, role_graph
) -> None:
    use_case = EffectiveCatalogRolesUseCase(**_deps(uow_factory, denying_access_checker))
    assert len(await use_case.execute("p1", "p1")) == 1
    with pytest.raises(Forbidden):
        await use_case.execute("p2", "p1")


@pytest.mark.asyncio
async def test_effective_catalog_roles_are_a_union(
    uow_factory, mock_access_checker, role_graph
) -> None:
    """Two principal roles bound to overlapping catalog roles yield each role once."""
    from catalogacl.application.use_cases.catalog_role.bind_catalog_role import (
        BindCatalogRoleUseCase,
    )
    from catalogacl.application.use_cases.principal_role.assign_principal_role import (
        AssignPrincipalRoleUseCase,
    )
    from catalogacl.application.use_cases.principal_role.create_principal_role import (
        CreatePrincipalRoleUseCase,
    )

    deps = _deps(uow_factory, mock_access_checker)
    await CreatePrincipalRoleUseCase(**deps).execute(ADMIN, "pr2")
    await CreateCatalogRoleUseCase(**deps).execute(ADMIN, "sales", "cr2")
    await AssignPrincipalRoleUseCase(**deps).execute(ADMIN, "p1", "pr2")
    bind = BindCatalogRoleUseCase(**deps)
    await bind.execute(ADMIN, "pr2", "sales", "cr1")
    await bind.execute(ADMIN, "pr2", "sales", "cr2")
    assert await bind.execute(ADMIN, "pr2", "sales", "cr2") is False

    roles = await EffectiveCatalogRolesUseCase(**deps).execute(ADMIN, "p1")
    assert sorted(r.name for r in roles) == ["cr1", "cr2"]


@pytest.mark.asyncio
async def test_revoking_principal_role_detaches_without_touching_grants(
    uow_factory, mock_access_checker, role_graph, grant_privilege
) -> None:
    deps = _deps(uow_factory, mock_access_checker)
    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    await RevokePrincipalRoleUseCase(**deps).execute(ADMIN, "p1", "pr1")

    assert await EffectiveCatalogRolesUseCase(**deps).execute(ADMIN, "p1") == set()
    grants = await ListGrantsUseCase(**deps).for_catalog_role(ADMIN, "sales", "cr1")
    assert len(grants) == 1
    with pytest.raises(NotFound):
        await RevokePrincipalRoleUseCase(**deps).execute(ADMIN, "p1", "pr1")


@pytest.mark.asyncio
async def test_unbind_missing_binding_not_found(
    uow_factory, mock_access_checker, role_graph
) -> None:
    unbind = UnbindCatalogRoleUseCase(**_deps(uow_factory, mock_access_checker))
    await unbind.execute(ADMIN, "pr1", "sales", "cr1")
    with pytest.raises(NotFound):
        await unbind.execute(ADMIN, "pr1", "sales", "cr1")


@pytest.mark.asyncio
async def test_delete_principal_role_removes_edges(
    uow_factory, mock_access_checker, role_graph
) -> None:
    deps = _deps(uow_factory, mock_access_checker)
    await DeletePrincipalRoleUseCase(**deps).execute(ADMIN, "pr1")
    assert await EffectiveCatalogRolesUseCase(**deps).execute(ADMIN, "p1") == set()


@pytest.mark.asyncio
async def test_catalog_role_names_are_scoped_per_catalog(
    uow_factory, mock_access_checker
) -> None:
    create = CreateCatalogRoleUseCase(**_deps(uow_factory, mock_access_checker))
    await create.execute(ADMIN, "sales", "reader")
    await create.execute(ADMIN, "finance", "reader")
    with pytest.raises(Conflict):
        await create.execute(ADMIN, "sales", "reader")


@pytest.mark.asyncio
async def test_catalog_role_management_requires_catalog_access(
    uow_factory, denying_access_checker
) -> None:
    with pytest.raises(Forbidden):
        await CreateCatalogRoleUseCase(**_deps(uow_factory, denying_access_checker)).execute(
            "mallory", "sales", "reader"
        )
    denying_access_checker.can_manage_access.assert_awaited_with("mallory", "sales")


# --- Grants ---


@pytest.mark.asyncio
async def test_end_to_end_grant_and_cascading_revoke(
    uow_factory, mock_access_checker, role_graph, grant_privilege, revoke_privilege
) -> None:
    """p1 -> pr1 -> cr1; grant on a namespace, cascade-revoke it, cr1 keeps its bindings."""
    deps = _deps(uow_factory, mock_access_checker)
    roles = await EffectiveCatalogRolesUseCase(**deps).execute(ADMIN, "p1")
    assert {r.key for r in roles} == {("sales", "cr1")}

    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    await revoke_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT", cascade=True)

    grants = await ListGrantsUseCase(**deps).for_catalog_role(ADMIN, "sales", "cr1")
    assert grants == []
    roles = await EffectiveCatalogRolesUseCase(**deps).execute(ADMIN, "p1")
    assert {r.key for r in roles} == {("sales", "cr1")}


@pytest.mark.asyncio
async def test_grant_is_idempotent(
    uow_factory, mock_access_checker, role_graph, grant_privilege
) -> None:
    first, created = await grant_privilege.execute(ADMIN, "sales", "cr1", TABLE_ABT, "SELECT")
    second, created_again = await grant_privilege.execute(
        ADMIN, "sales", "cr1", TABLE_ABT, "SELECT"
    )
    assert first.id == second.id
    assert created and not created_again
    grants = await ListGrantsUseCase(
        **_deps(uow_factory, mock_access_checker)
    ).for_catalog_role(ADMIN, "sales", "cr1")
    assert len(grants) == 1


@pytest.mark.asyncio
async def test_same_resource_different_privileges_are_distinct(
    uow_factory, mock_access_checker, role_graph, grant_privilege
) -> None:
    await grant_privilege.execute(ADMIN, "sales", "cr1", TABLE_ABT, "TABLE_READ_DATA")
    await grant_privilege.execute(ADMIN, "sales", "cr1", TABLE_ABT, "TABLE_WRITE_DATA")
    grants = await ListGrantsUseCase(
        **_deps(uow_factory, mock_access_checker)
    ).for_resource(ADMIN, "sales", TABLE_ABT)
    assert sorted(g.privilege for g in grants) == ["TABLE_READ_DATA", "TABLE_WRITE_DATA"]


@pytest.mark.asyncio
async def test_grant_on_missing_catalog_role_not_found(
    uow_factory, mock_access_checker, grant_privilege
) -> None:
    with pytest.raises(NotFound, match="Catalog role"):
        await grant_privilege.execute(ADMIN, "sales", "ghost", CatalogResource(), "SELECT")


@pytest.mark.asyncio
async def test_grant_requires_catalog_access(
    uow_factory, denying_access_checker, role_graph
) -> None:
    from catalogacl.application.use_cases.grant.grant_privilege import GrantPrivilegeUseCase

    with pytest.raises(Forbidden):
        await GrantPrivilegeUseCase(uow_factory, denying_access_checker).execute(
            "mallory", "sales", "cr1", NS_AB, "SELECT"
        )


@pytest.mark.asyncio
async def test_cascade_revoke_removes_namespace_and_table(
    uow_factory, mock_access_checker, role_graph, grant_privilege, revoke_privilege
) -> None:
    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    await grant_privilege.execute(ADMIN, "sales", "cr1", TABLE_ABT, "SELECT")

    removed = await revoke_privilege.execute(
        ADMIN, "sales", "cr1", NS_AB, "SELECT", cascade=True
    )
    assert {g.resource for g in removed} == {NS_AB, TABLE_ABT}
    grants = await ListGrantsUseCase(
        **_deps(uow_factory, mock_access_checker)
    ).for_catalog_role(ADMIN, "sales", "cr1")
    assert grants == []


@pytest.mark.asyncio
async def test_plain_revoke_leaves_table_grant(
    uow_factory, mock_access_checker, role_graph, grant_privilege, revoke_privilege
) -> None:
    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    await grant_privilege.execute(ADMIN, "sales", "cr1", TABLE_ABT, "SELECT")

    removed = await revoke_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    assert [g.resource for g in removed] == [NS_AB]
    grants = await ListGrantsUseCase(
        **_deps(uow_factory, mock_access_checker)
    ).for_catalog_role(ADMIN, "sales", "cr1")
    assert [g.resource for g in grants] == [TABLE_ABT]


@pytest.mark.asyncio
async def test_cascade_does_not_cross_catalog_roles(
    uow_factory, mock_access_checker, role_graph, grant_privilege, revoke_privilege
) -> None:
    await CreateCatalogRoleUseCase(**_deps(uow_factory, mock_access_checker)).execute(
        ADMIN, "sales", "cr2"
    )
    await grant_privilege.execute(ADMIN, "sales", "cr1", CatalogResource(), "SELECT")
    await grant_privilege.execute(ADMIN, "sales", "cr2", TABLE_ABT, "SELECT")

    await revoke_privilege.execute(
        ADMIN, "sales", "cr1", CatalogResource(), "SELECT", cascade=True
    )
    grants = await ListGrantsUseCase(
        **_deps(uow_factory, mock_access_checker)
    ).for_catalog_role(ADMIN, "sales", "cr2")
    assert len(grants) == 1


@pytest.mark.asyncio
async def test_revoke_missing_grant_not_found(
    uow_factory, mock_access_checker, role_graph, revoke_privilege
) -> None:
    with pytest.raises(NotFound, match="Grant"):
        await revoke_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT", cascade=True)


@pytest.mark.asyncio
async def test_failed_cascade_removes_nothing(
    uow_factory, mock_access_checker, role_graph, grant_privilege, store, monkeypatch
) -> None:
    """A store failure during the cascade rolls the whole removal back."""
    from catalogacl.application.use_cases.grant.revoke_privilege import RevokePrivilegeUseCase
    from catalogacl.domain.exceptions import ServerError
    from catalogacl.infrastructure.persistence.memory.repositories import (
        MemoryGrantRepository,
    )

    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    await grant_privilege.execute(ADMIN, "sales", "cr1", TABLE_ABT, "SELECT")

    original = MemoryGrantRepository.delete_many

    async def partial_delete(self, grant_ids):
        # Removes the first grant, then reports the short count.
        return await original(self, grant_ids[:1])

    monkeypatch.setattr(MemoryGrantRepository, "delete_many", partial_delete)
    with pytest.raises(ServerError):
        await RevokePrivilegeUseCase(uow_factory, mock_access_checker).execute(
            ADMIN, "sales", "cr1", NS_AB, "SELECT", cascade=True
        )

    assert len(store.state.grants) == 2


@pytest.mark.asyncio
async def test_grant_with_version_bumps_catalog_role(
    uow_factory, mock_access_checker, role_graph, grant_privilege, revoke_privilege
) -> None:
    from catalogacl.application.use_cases.catalog_role.read_catalog_roles import (
        ReadCatalogRolesUseCase,
    )

    read = ReadCatalogRolesUseCase(**_deps(uow_factory, mock_access_checker))
    await grant_privilege.execute(
        ADMIN, "sales", "cr1", ViewResource(("a",), "v"), "SELECT", expected_version=1
    )
    assert (await read.get(ADMIN, "sales", "cr1")).entity_version == 2

    with pytest.raises(Conflict):
        await revoke_privilege.execute(
            ADMIN, "sales", "cr1", ViewResource(("a",), "v"), "SELECT", expected_version=1
        )
    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    assert (await read.get(ADMIN, "sales", "cr1")).entity_version == 2


@pytest.mark.asyncio
async def test_regrant_with_version_leaves_catalog_role_version(
    uow_factory, mock_access_checker, role_graph, grant_privilege
) -> None:
    """Granting an existing tuple checks the version but does not bump it."""
    from catalogacl.application.use_cases.catalog_role.read_catalog_roles import (
        ReadCatalogRolesUseCase,
    )

    read = ReadCatalogRolesUseCase(**_deps(uow_factory, mock_access_checker))
    _, created = await grant_privilege.execute(
        ADMIN, "sales", "cr1", NS_AB, "SELECT", expected_version=1
    )
    assert created
    _, created = await grant_privilege.execute(
        ADMIN, "sales", "cr1", NS_AB, "SELECT", expected_version=2
    )
    assert not created
    assert (await read.get(ADMIN, "sales", "cr1")).entity_version == 2

    with pytest.raises(Conflict):
        await grant_privilege.execute(
            ADMIN, "sales", "cr1", NS_AB, "SELECT", expected_version=1
        )
    assert (await read.get(ADMIN, "sales", "cr1")).entity_version == 2


@pytest.mark.asyncio
async def test_regrant_after_cascading_revoke_is_accepted(
    uow_factory, mock_access_checker, role_graph, grant_privilege, revoke_privilege
) -> None:
    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    await revoke_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT", cascade=True)
    grant, _ = await grant_privilege.execute(ADMIN, "sales", "cr1", TABLE_ABT, "SELECT")
    assert grant.resource == TABLE_ABT


@pytest.mark.asyncio
async def test_delete_catalog_role_drops_grants_and_bindings(
    uow_factory, mock_access_checker, role_graph, grant_privilege, store
) -> None:
    deps = _deps(uow_factory, mock_access_checker)
    await grant_privilege.execute(ADMIN, "sales", "cr1", NS_AB, "SELECT")
    await DeleteCatalogRoleUseCase(**deps).execute(ADMIN, "sales", "cr1", expected_version=1)

    assert store.state.grants == {}
    assert store.state.bindings == set()
    assert await EffectiveCatalogRolesUseCase(**deps).execute(ADMIN, "p1") == set()


@pytest.mark.asyncio
async def test_update_catalog_role_conflict(
    uow_factory, mock_access_checker, role_graph
) -> None:
    update = UpdateCatalogRoleUseCase(**_deps(uow_factory, mock_access_checker))
    updated = await update.execute(ADMIN, "sales", "cr1", {"owner": "bi"}, expected_version=1)
    assert updated.entity_version == 2
    assert updated.catalog_name == "sales"
    with pytest.raises(Conflict):
        await update.execute(ADMIN, "sales", "cr1", {"owner": "ops"}, expected_version=1)
