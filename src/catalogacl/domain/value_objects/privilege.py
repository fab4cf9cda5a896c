"""Catalog privileges and the resource types they apply to."""

from enum import StrEnum

from catalogacl.domain.value_objects.resource_type import ResourceType


class Privilege(StrEnum):
    """Privileges that can be granted to a catalog role."""

    CATALOG_MANAGE_ACCESS = "CATALOG_MANAGE_ACCESS"
    CATALOG_MANAGE_CONTENT = "CATALOG_MANAGE_CONTENT"
    CATALOG_MANAGE_METADATA = "CATALOG_MANAGE_METADATA"
    CATALOG_READ_PROPERTIES = "CATALOG_READ_PROPERTIES"
    CATALOG_WRITE_PROPERTIES = "CATALOG_WRITE_PROPERTIES"
    CATALOG_ATTACH_POLICY = "CATALOG_ATTACH_POLICY"
    CATALOG_DETACH_POLICY = "CATALOG_DETACH_POLICY"
    NAMESPACE_CREATE = "NAMESPACE_CREATE"
    NAMESPACE_DROP = "NAMESPACE_DROP"
    NAMESPACE_LIST = "NAMESPACE_LIST"
    NAMESPACE_READ_PROPERTIES = "NAMESPACE_READ_PROPERTIES"
    NAMESPACE_WRITE_PROPERTIES = "NAMESPACE_WRITE_PROPERTIES"
    NAMESPACE_FULL_METADATA = "NAMESPACE_FULL_METADATA"
    NAMESPACE_ATTACH_POLICY = "NAMESPACE_ATTACH_POLICY"
    NAMESPACE_DETACH_POLICY = "NAMESPACE_DETACH_POLICY"
    TABLE_CREATE = "TABLE_CREATE"
    TABLE_DROP = "TABLE_DROP"
    TABLE_LIST = "TABLE_LIST"
    TABLE_READ_PROPERTIES = "TABLE_READ_PROPERTIES"
    TABLE_WRITE_PROPERTIES = "TABLE_WRITE_PROPERTIES"
    TABLE_READ_DATA = "TABLE_READ_DATA"
    TABLE_WRITE_DATA = "TABLE_WRITE_DATA"
    TABLE_FULL_METADATA = "TABLE_FULL_METADATA"
    TABLE_ATTACH_POLICY = "TABLE_ATTACH_POLICY"
    TABLE_DETACH_POLICY = "TABLE_DETACH_POLICY"
    TABLE_ASSIGN_UUID = "TABLE_ASSIGN_UUID"
    TABLE_UPGRADE_FORMAT_VERSION = "TABLE_UPGRADE_FORMAT_VERSION"
    TABLE_ADD_SCHEMA = "TABLE_ADD_SCHEMA"
    TABLE_SET_CURRENT_SCHEMA = "TABLE_SET_CURRENT_SCHEMA"
    TABLE_ADD_PARTITION_SPEC = "TABLE_ADD_PARTITION_SPEC"
    TABLE_ADD_SORT_ORDER = "TABLE_ADD_SORT_ORDER"
    TABLE_SET_DEFAULT_SORT_ORDER = "TABLE_SET_DEFAULT_SORT_ORDER"
    TABLE_ADD_SNAPSHOT = "TABLE_ADD_SNAPSHOT"
    TABLE_SET_SNAPSHOT_REF = "TABLE_SET_SNAPSHOT_REF"
    TABLE_REMOVE_SNAPSHOTS = "TABLE_REMOVE_SNAPSHOTS"
    TABLE_REMOVE_SNAPSHOT_REF = "TABLE_REMOVE_SNAPSHOT_REF"
    TABLE_SET_LOCATION = "TABLE_SET_LOCATION"
    TABLE_SET_PROPERTIES = "TABLE_SET_PROPERTIES"
    TABLE_REMOVE_PROPERTIES = "TABLE_REMOVE_PROPERTIES"
    TABLE_SET_STATISTICS = "TABLE_SET_STATISTICS"
    TABLE_REMOVE_STATISTICS = "TABLE_REMOVE_STATISTICS"
    TABLE_REMOVE_PARTITION_SPECS = "TABLE_REMOVE_PARTITION_SPECS"
    TABLE_MANAGE_STRUCTURE = "TABLE_MANAGE_STRUCTURE"
    VIEW_CREATE = "VIEW_CREATE"
    VIEW_DROP = "VIEW_DROP"
    VIEW_LIST = "VIEW_LIST"
    VIEW_READ_PROPERTIES = "VIEW_READ_PROPERTIES"
    VIEW_WRITE_PROPERTIES = "VIEW_WRITE_PROPERTIES"
    VIEW_FULL_METADATA = "VIEW_FULL_METADATA"
    POLICY_CREATE = "POLICY_CREATE"
    POLICY_WRITE = "POLICY_WRITE"
    POLICY_READ = "POLICY_READ"
    POLICY_DROP = "POLICY_DROP"
    POLICY_LIST = "POLICY_LIST"
    POLICY_FULL_METADATA = "POLICY_FULL_METADATA"
    POLICY_ATTACH = "POLICY_ATTACH"
    POLICY_DETACH = "POLICY_DETACH"


# Table-level privileges that may also be granted on enclosing containers.
_TABLE_OPERATIONS = frozenset(
    p
    for p in Privilege
    if p.name.startswith("TABLE_")
    and p not in (Privilege.TABLE_ATTACH_POLICY, Privilege.TABLE_DETACH_POLICY)
)
_CONTAINER_COMMON = (
    frozenset(
        {
            Privilege.CATALOG_MANAGE_ACCESS,
            Privilege.CATALOG_MANAGE_CONTENT,
            Privilege.CATALOG_MANAGE_METADATA,
            Privilege.NAMESPACE_CREATE,
            Privilege.NAMESPACE_DROP,
            Privilege.NAMESPACE_LIST,
            Privilege.NAMESPACE_READ_PROPERTIES,
            Privilege.NAMESPACE_WRITE_PROPERTIES,
            Privilege.NAMESPACE_FULL_METADATA,
            Privilege.VIEW_CREATE,
            Privilege.VIEW_DROP,
            Privilege.VIEW_LIST,
            Privilege.VIEW_READ_PROPERTIES,
            Privilege.VIEW_WRITE_PROPERTIES,
            Privilege.VIEW_FULL_METADATA,
            Privilege.POLICY_CREATE,
            Privilege.POLICY_WRITE,
            Privilege.POLICY_READ,
            Privilege.POLICY_DROP,
            Privilege.POLICY_LIST,
            Privilege.POLICY_FULL_METADATA,
        }
    )
    | _TABLE_OPERATIONS
)

PRIVILEGES_BY_RESOURCE_TYPE: dict[ResourceType, frozenset[Privilege]] = {
    ResourceType.CATALOG: _CONTAINER_COMMON
    | {
        Privilege.CATALOG_READ_PROPERTIES,
        Privilege.CATALOG_WRITE_PROPERTIES,
        Privilege.CATALOG_ATTACH_POLICY,
        Privilege.CATALOG_DETACH_POLICY,
    },
    ResourceType.NAMESPACE: _CONTAINER_COMMON
    | {Privilege.NAMESPACE_ATTACH_POLICY, Privilege.NAMESPACE_DETACH_POLICY},
    ResourceType.TABLE: (_TABLE_OPERATIONS - {Privilege.TABLE_CREATE})
    | {
        Privilege.CATALOG_MANAGE_ACCESS,
        Privilege.TABLE_ATTACH_POLICY,
        Privilege.TABLE_DETACH_POLICY,
    },
    ResourceType.VIEW: frozenset(
        {
            Privilege.CATALOG_MANAGE_ACCESS,
            Privilege.VIEW_DROP,
            Privilege.VIEW_LIST,
            Privilege.VIEW_READ_PROPERTIES,
            Privilege.VIEW_WRITE_PROPERTIES,
            Privilege.VIEW_FULL_METADATA,
        }
    ),
    ResourceType.POLICY: frozenset(
        {
            Privilege.CATALOG_MANAGE_ACCESS,
            Privilege.POLICY_READ,
            Privilege.POLICY_DROP,
            Privilege.POLICY_WRITE,
            Privilege.POLICY_LIST,
            Privilege.POLICY_FULL_METADATA,
            Privilege.POLICY_ATTACH,
            Privilege.POLICY_DETACH,
        }
    ),
}


def privileges_for(resource_type: ResourceType) -> frozenset[Privilege]:
    """Privileges that may be granted on a resource of the given type."""
    return PRIVILEGES_BY_RESOURCE_TYPE[resource_type]
