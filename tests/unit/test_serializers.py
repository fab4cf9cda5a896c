"""Unit tests for the API wire format."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from catalogacl.domain.entities import CatalogRole, Grant
from catalogacl.domain.exceptions import ValidationError
from catalogacl.domain.value_objects import (
    CatalogResource,
    NamespaceResource,
    PolicyResource,
    Privilege,
    TableResource,
    ViewResource,
)
from catalogacl.interfaces.api.serializers import (
    catalog_role_to_dict,
    expected_version,
    grant_to_dict,
    parse_grant,
    parse_resource,
    resource_to_dict,
)


@pytest.mark.parametrize(
    ("data", "resource"),
    [
        ({"type": "catalog"}, CatalogResource()),
        ({"type": "namespace", "namespace": []}, NamespaceResource()),
        ({"type": "namespace", "namespace": ["a", "b"]}, NamespaceResource(("a", "b"))),
        ({"type": "table", "namespace": ["a"], "tableName": "t"}, TableResource(("a",), "t")),
        ({"type": "view", "namespace": ["a"], "viewName": "v"}, ViewResource(("a",), "v")),
        ({"type": "policy", "namespace": [], "policyName": "p"}, PolicyResource((), "p")),
    ],
)
def test_parse_resource(data: dict, resource) -> None:
    assert parse_resource(data) == resource
    assert parse_resource(resource_to_dict(resource)) == resource


@pytest.mark.parametrize(
    "data",
    [
        {"type": "database"},
        {"namespace": ["a"]},
        {"type": "table", "namespace": ["a"]},
        {"type": "table", "namespace": ["a"], "tableName": ""},
        {"type": "namespace", "namespace": "a.b"},
        {"type": "namespace", "namespace": ["a", ""]},
        "catalog",
    ],
)
def test_parse_resource_rejects_malformed(data) -> None:
    with pytest.raises(ValidationError):
        parse_resource(data)


def test_parse_grant_checks_privilege_catalogue() -> None:
    resource, privilege = parse_grant(
        {"type": "table", "namespace": ["a"], "tableName": "t", "privilege": "TABLE_READ_DATA"}
    )
    assert resource == TableResource(("a",), "t")
    assert privilege == Privilege.TABLE_READ_DATA

    with pytest.raises(ValidationError, match="Unknown privilege"):
        parse_grant({"type": "catalog", "privilege": "SELECT"})
    with pytest.raises(ValidationError, match="cannot be granted"):
        parse_grant({"type": "view", "namespace": [], "viewName": "v", "privilege": "TABLE_DROP"})
    with pytest.raises(ValidationError, match="privilege"):
        parse_grant({"type": "catalog"})


def test_expected_version() -> None:
    assert expected_version({}) is None
    assert expected_version({"currentEntityVersion": 3}) == 3
    for bad in (0, -1, "2", True):
        with pytest.raises(ValidationError):
            expected_version({"currentEntityVersion": bad})


def test_catalog_role_rendering() -> None:
    created = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
    role = CatalogRole(
        catalog_name="sales",
        name="cr1",
        create_timestamp=created,
        last_update_timestamp=created,
        properties={"owner": "bi"},
        entity_version=4,
    )
    assert catalog_role_to_dict(role) == {
        "catalogName": "sales",
        "name": "cr1",
        "properties": {"owner": "bi"},
        "entityVersion": 4,
        "createTimestamp": int(created.timestamp() * 1000),
        "lastUpdateTimestamp": int(created.timestamp() * 1000),
    }


def test_grant_rendering() -> None:
    grant = Grant(
        id=uuid4(),
        catalog_name="sales",
        catalog_role_name="cr1",
        resource=NamespaceResource(("a", "b")),
        privilege=Privilege.NAMESPACE_LIST,
        created_at=datetime.now(UTC),
    )
    assert grant_to_dict(grant) == {
        "type": "namespace",
        "namespace": ["a", "b"],
        "privilege": "NAMESPACE_LIST",
        "catalogName": "sales",
        "catalogRoleName": "cr1",
    }
