"""Principal role API resources."""

import falcon.asgi

from catalogacl.application.use_cases.catalog_role.bind_catalog_role import (
    BindCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.unbind_catalog_role import (
    UnbindCatalogRoleUseCase,
)
from catalogacl.application.use_cases.principal_role.create_principal_role import (
    CreatePrincipalRoleUseCase,
)
from catalogacl.application.use_cases.principal_role.delete_principal_role import (
    DeletePrincipalRoleUseCase,
)
from catalogacl.application.use_cases.principal_role.read_principal_roles import (
    ReadPrincipalRolesUseCase,
)
from catalogacl.application.use_cases.principal_role.update_principal_role import (
    UpdatePrincipalRoleUseCase,
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


class PrincipalRolesResource:
    """GET/POST /principal-roles - list and create principal roles."""

    def __init__(
        self,
        read_principal_roles: ReadPrincipalRolesUseCase,
        create_principal_role: CreatePrincipalRoleUseCase,
    ) -> None:
        self._read = read_principal_roles
        self._create = create_principal_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        roles = await self._read.list_all(actor_of(req))
        resp.media = {"roles": [principal_role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = actor_of(req)
        data = nested(await read_body(req), "principalRole")
        role = await self._create.execute(
            actor, require_field(data, "name"), data.get("properties")
        )
        resp.media = principal_role_to_dict(role)
        resp.status = falcon.HTTP_201


class PrincipalRoleResource:
    """GET/PUT/DELETE /principal-roles/{principal_role_name}."""

    def __init__(
        self,
        read_principal_roles: ReadPrincipalRolesUseCase,
        update_principal_role: UpdatePrincipalRoleUseCase,
        delete_principal_role: DeletePrincipalRoleUseCase,
    ) -> None:
        self._read = read_principal_roles
        self._update = update_principal_role
        self._delete = delete_principal_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_role_name: str
    ) -> None:
        role = await self._read.get(actor_of(req), principal_role_name)
        resp.media = principal_role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_role_name: str
    ) -> None:
        actor = actor_of(req)
        body = await read_body(req)
        role = await self._update.execute(
            actor, principal_role_name, body.get("properties"), expected_version(body)
        )
        resp.media = principal_role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_role_name: str
    ) -> None:
        await self._delete.execute(actor_of(req), principal_role_name, version_param(req))
        resp.status = falcon.HTTP_204


class PrincipalRolePrincipalsResource:
    """GET /principal-roles/{principal_role_name}/principals."""

    def __init__(self, read_principal_roles: ReadPrincipalRolesUseCase) -> None:
        self._read = read_principal_roles

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_role_name: str
    ) -> None:
        principals = await self._read.principals(actor_of(req), principal_role_name)
        resp.media = {"principals": [principal_to_dict(p) for p in principals]}
        resp.status = falcon.HTTP_200


class PrincipalRoleCatalogRolesResource:
    """GET/PUT /principal-roles/{principal_role_name}/catalog-roles/{catalog_name}."""

    def __init__(
        self,
        read_principal_roles: ReadPrincipalRolesUseCase,
        bind_catalog_role: BindCatalogRoleUseCase,
    ) -> None:
        self._read = read_principal_roles
        self._bind = bind_catalog_role

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        principal_role_name: str,
        catalog_name: str,
    ) -> None:
        """Catalog roles of the catalog bound to the principal role."""
        roles = await self._read.catalog_roles(actor_of(req), principal_role_name, catalog_name)
        resp.media = {"roles": [catalog_role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        principal_role_name: str,
        catalog_name: str,
    ) -> None:
        """Bind a catalog role; repeating the call changes nothing."""
        actor = actor_of(req)
        data = nested(await read_body(req), "catalogRole")
        created = await self._bind.execute(
            actor, principal_role_name, catalog_name, require_field(data, "name")
        )
        resp.status = falcon.HTTP_201 if created else falcon.HTTP_200


class PrincipalRoleCatalogRoleResource:
    """DELETE /principal-roles/{pr}/catalog-roles/{catalog_name}/{catalog_role_name}."""

    def __init__(self, unbind_catalog_role: UnbindCatalogRoleUseCase) -> None:
        self._unbind = unbind_catalog_role

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        principal_role_name: str,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        await self._unbind.execute(
            actor_of(req), principal_role_name, catalog_name, catalog_role_name
        )
        resp.status = falcon.HTTP_204
