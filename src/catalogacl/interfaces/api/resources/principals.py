"""Principal API resources."""

import falcon.asgi

from catalogacl.application.use_cases.catalog_role.effective_catalog_roles import (
    EffectiveCatalogRolesUseCase,
)
from catalogacl.application.use_cases.principal.create_principal import CreatePrincipalUseCase
from catalogacl.application.use_cases.principal.delete_principal import DeletePrincipalUseCase
from catalogacl.application.use_cases.principal.read_principals import ReadPrincipalsUseCase
from catalogacl.application.use_cases.principal.update_principal import UpdatePrincipalUseCase
from catalogacl.application.use_cases.principal_role.assign_principal_role import (
    AssignPrincipalRoleUseCase,
)
from catalogacl.application.use_cases.principal_role.revoke_principal_role import (
    RevokePrincipalRoleUseCase,
)
from catalogacl.interfaces.api.serializers import (
    actor_of,
    catalog_role_to_dict,
    expected_version,
    nested,
    principal_role_to_dict,
    principal_to_dict,
    read_body,
    require_field,
    version_param,
)


class PrincipalsResource:
    """GET/POST /principals - list and create principals."""

    def __init__(
        self, read_principals: ReadPrincipalsUseCase, create_principal: CreatePrincipalUseCase
    ) -> None:
        self._read = read_principals
        self._create = create_principal

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List principals."""
        principals = await self._read.list_all(actor_of(req))
        resp.media = {"principals": [principal_to_dict(p) for p in principals]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create principal."""
        actor = actor_of(req)
        data = nested(await read_body(req), "principal")
        principal = await self._create.execute(
            actor, require_field(data, "name"), data.get("properties")
        )
        resp.media = principal_to_dict(principal)
        resp.status = falcon.HTTP_201


class PrincipalResource:
    """GET/PUT/DELETE /principals/{principal_name}."""

    def __init__(
        self,
        read_principals: ReadPrincipalsUseCase,
        update_principal: UpdatePrincipalUseCase,
        delete_principal: DeletePrincipalUseCase,
    ) -> None:
        self._read = read_principals
        self._update = update_principal
        self._delete = delete_principal

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_name: str
    ) -> None:
        principal = await self._read.get(actor_of(req), principal_name)
        resp.media = principal_to_dict(principal)
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_name: str
    ) -> None:
        """Replace properties; currentEntityVersion guards against lost updates."""
        actor = actor_of(req)
        body = await read_body(req)
        principal = await self._update.execute(
            actor, principal_name, body.get("properties"), expected_version(body)
        )
        resp.media = principal_to_dict(principal)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_name: str
    ) -> None:
        await self._delete.execute(actor_of(req), principal_name, version_param(req))
        resp.status = falcon.HTTP_204


class PrincipalPrincipalRolesResource:
    """GET/PUT /principals/{principal_name}/principal-roles."""

    def __init__(
        self,
        read_principals: ReadPrincipalsUseCase,
        assign_principal_role: AssignPrincipalRoleUseCase,
    ) -> None:
        self._read = read_principals
        self._assign = assign_principal_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_name: str
    ) -> None:
        """Principal roles assigned to the principal."""
        roles = await self._read.principal_roles(actor_of(req), principal_name)
        resp.media = {"roles": [principal_role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_name: str
    ) -> None:
        """Assign a principal role; repeating the call changes nothing."""
        actor = actor_of(req)
        data = nested(await read_body(req), "principalRole")
        created = await self._assign.execute(actor, principal_name, require_field(data, "name"))
        resp.status = falcon.HTTP_201 if created else falcon.HTTP_200


class PrincipalPrincipalRoleResource:
    """DELETE /principals/{principal_name}/principal-roles/{principal_role_name}."""

    def __init__(self, revoke_principal_role: RevokePrincipalRoleUseCase) -> None:
        self._revoke = revoke_principal_role

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        principal_name: str,
        principal_role_name: str,
    ) -> None:
        await self._revoke.execute(actor_of(req), principal_name, principal_role_name)
        resp.status = falcon.HTTP_204


class PrincipalCatalogRolesResource:
    """GET /principals/{principal_name}/catalog-roles - effective catalog roles."""

    def __init__(self, effective_catalog_roles: EffectiveCatalogRolesUseCase) -> None:
        self._effective = effective_catalog_roles

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_name: str
    ) -> None:
        roles = await self._effective.execute(actor_of(req), principal_name)
        ordered = sorted(roles, key=lambda r: r.key)
        resp.media = {"catalogRoles": [catalog_role_to_dict(r) for r in ordered]}
        resp.status = falcon.HTTP_200
