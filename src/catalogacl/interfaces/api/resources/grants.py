"""Grant API resources."""

import falcon.asgi

from catalogacl.application.use_cases.grant.grant_privilege import GrantPrivilegeUseCase
from catalogacl.application.use_cases.grant.list_grants import ListGrantsUseCase
from catalogacl.application.use_cases.grant.revoke_privilege import RevokePrivilegeUseCase
from catalogacl.interfaces.api.serializers import (
    actor_of,
    expected_version,
    grant_to_dict,
    nested,
    parse_grant,
    parse_resource,
    read_body,
)


class CatalogRoleGrantsResource:
    """GET/PUT/POST /catalogs/{catalog_name}/catalog-roles/{catalog_role_name}/grants.

    PUT adds a grant, POST revokes one (``?cascade=true`` to include the
    subtree beneath the resource).
    """

    def __init__(
        self,
        list_grants: ListGrantsUseCase,
        grant_privilege: GrantPrivilegeUseCase,
        revoke_privilege: RevokePrivilegeUseCase,
    ) -> None:
        self._list = list_grants
        self._grant = grant_privilege
        self._revoke = revoke_privilege

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        grants = await self._list.for_catalog_role(
            actor_of(req), catalog_name, catalog_role_name
        )
        resp.media = {"grants": [grant_to_dict(g) for g in grants]}
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        """Grant a privilege; granting an existing tuple succeeds without change."""
        actor = actor_of(req)
        body = await read_body(req)
        resource, privilege = parse_grant(nested(body, "grant"))
        grant, created = await self._grant.execute(
            actor,
            catalog_name,
            catalog_role_name,
            resource,
            privilege,
            expected_version(body),
        )
        resp.media = grant_to_dict(grant)
        resp.status = falcon.HTTP_201 if created else falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        """Revoke a privilege and report every grant removed."""
        actor = actor_of(req)
        cascade = req.get_param_as_bool("cascade", default=False)
        body = await read_body(req)
        resource, privilege = parse_grant(nested(body, "grant"))
        removed = await self._revoke.execute(
            actor,
            catalog_name,
            catalog_role_name,
            resource,
            privilege,
            cascade=cascade,
            expected_version=expected_version(body),
        )
        resp.media = {"revoked": [grant_to_dict(g) for g in removed]}
        resp.status = falcon.HTTP_200


class CatalogGrantsResource:
    """POST /catalogs/{catalog_name}/grants - grants on one resource across catalog roles."""

    def __init__(self, list_grants: ListGrantsUseCase) -> None:
        self._list = list_grants

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, catalog_name: str
    ) -> None:
        actor = actor_of(req)
        resource = parse_resource(await read_body(req))
        grants = await self._list.for_resource(actor, catalog_name, resource)
        resp.media = {"grants": [grant_to_dict(g) for g in grants]}
        resp.status = falcon.HTTP_200
