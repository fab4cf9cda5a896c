"""Wire format of the management API - parsing request bodies and rendering entities.

Field names are camelCase; timestamps are epoch milliseconds.
"""

from datetime import datetime
from typing import Any

import falcon.asgi

from catalogacl.domain.entities import CatalogRole, Grant, Principal, PrincipalRole
from catalogacl.domain.exceptions import Unauthenticated, ValidationError
from catalogacl.domain.value_objects import (
    CatalogResource,
    NamespaceResource,
    PolicyResource,
    Privilege,
    Resource,
    ResourceType,
    TableResource,
    ViewResource,
    privileges_for,
)

_LEAF_FIELD = {
    ResourceType.TABLE: "tableName",
    ResourceType.VIEW: "viewName",
    ResourceType.POLICY: "policyName",
}


def actor_of(req: falcon.asgi.Request) -> str:
    """Principal name of the caller; Unauthenticated when absent."""
    actor = getattr(req.context, "actor", None)
    if not actor:
        raise Unauthenticated("Missing principal identity")
    return actor.principal_name


async def read_body(req: falcon.asgi.Request) -> dict[str, Any]:
    """JSON object body of the request."""
    body = await req.get_media(default_when_empty=None)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require_field(body: dict[str, Any], key: str) -> Any:
    try:
        return body[key]
    except KeyError:
        raise ValidationError(f"Missing required field: {key}") from None


def expected_version(body: dict[str, Any]) -> int | None:
    """``currentEntityVersion`` of a versioned mutation, if given."""
    value = body.get("currentEntityVersion")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("currentEntityVersion must be a positive integer")
    return value


def version_param(req: falcon.asgi.Request) -> int | None:
    """``currentEntityVersion`` query parameter for DELETE requests."""
    return req.get_param_as_int("currentEntityVersion", min_value=1)


def parse_resource(data: Any) -> Resource:
    """Resource from its tagged wire form."""
    if not isinstance(data, dict):
        raise ValidationError("Resource must be a JSON object")
    try:
        resource_type = ResourceType(data.get("type"))
    except ValueError:
        raise ValidationError(f"Unknown resource type: {data.get('type')}") from None

    try:
        if resource_type == ResourceType.CATALOG:
            return CatalogResource()
        namespace = data.get("namespace", [])
        if not isinstance(namespace, list):
            raise ValidationError("namespace must be an array of strings")
        if resource_type == ResourceType.NAMESPACE:
            return NamespaceResource(tuple(namespace))
        leaf = require_field(data, _LEAF_FIELD[resource_type])
        match resource_type:
            case ResourceType.TABLE:
                return TableResource(tuple(namespace), leaf)
            case ResourceType.VIEW:
                return ViewResource(tuple(namespace), leaf)
            case ResourceType.POLICY:
                return PolicyResource(tuple(namespace), leaf)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    raise ValidationError(f"Unknown resource type: {resource_type}")


def parse_privilege(value: Any, resource: Resource) -> Privilege:
    """Privilege from the catalogue that applies to the resource type."""
    try:
        privilege = Privilege(value)
    except ValueError:
        raise ValidationError(f"Unknown privilege: {value}") from None
    if privilege not in privileges_for(resource.type):
        raise ValidationError(f"Privilege {privilege} cannot be granted on a {resource.type}")
    return privilege


def parse_grant(data: Any) -> tuple[Resource, Privilege]:
    """Resource and privilege of a grant record body."""
    resource = parse_resource(data)
    return resource, parse_privilege(require_field(data, "privilege"), resource)


def epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def resource_to_dict(resource: Resource) -> dict[str, Any]:
    data: dict[str, Any] = {"type": str(resource.type)}
    match resource:
        case CatalogResource():
            pass
        case NamespaceResource(namespace=ns):
            data["namespace"] = list(ns)
        case TableResource(namespace=ns, table_name=name):
            data.update(namespace=list(ns), tableName=name)
        case ViewResource(namespace=ns, view_name=name):
            data.update(namespace=list(ns), viewName=name)
        case PolicyResource(namespace=ns, policy_name=name):
            data.update(namespace=list(ns), policyName=name)
    return data


def grant_to_dict(grant: Grant) -> dict[str, Any]:
    return {
        **resource_to_dict(grant.resource),
        "privilege": str(grant.privilege),
        "catalogName": grant.catalog_name,
        "catalogRoleName": grant.catalog_role_name,
    }


def _entity_to_dict(entity: Principal | PrincipalRole | CatalogRole) -> dict[str, Any]:
    return {
        "name": entity.name,
        "properties": dict(entity.properties),
        "entityVersion": entity.entity_version,
        "createTimestamp": epoch_ms(entity.create_timestamp),
        "lastUpdateTimestamp": epoch_ms(entity.last_update_timestamp),
    }


def principal_to_dict(principal: Principal) -> dict[str, Any]:
    return _entity_to_dict(principal)


def principal_role_to_dict(principal_role: PrincipalRole) -> dict[str, Any]:
    return _entity_to_dict(principal_role)


def catalog_role_to_dict(catalog_role: CatalogRole) -> dict[str, Any]:
    return {"catalogName": catalog_role.catalog_name, **_entity_to_dict(catalog_role)}


def nested(body: dict[str, Any], key: str) -> dict[str, Any]:
    """Object under ``key``, e.g. the ``principal`` of a create request."""
    value = require_field(body, key)
    if not isinstance(value, dict):
        raise ValidationError(f"{key} must be a JSON object")
    return value
