"""Catalog role API resources."""

import falcon.asgi

from catalogacl.application.use_cases.catalog_role.create_catalog_role import (
    CreateCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.delete_catalog_role import (
    DeleteCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.read_catalog_roles import (
    ReadCatalogRolesUseCase,
)
from catalogacl.application.use_cases.catalog_role.update_catalog_role import (
    UpdateCatalogRoleUseCase,
)
from catalogacl.interfaces.api.serializers import (
    actor_of,
    catalog_role_to_dict,
    expected_version,
    nested,
    principal_role_to_dict,
    read_body,
    require_field,
    version_param,
)


class CatalogRolesResource:
    """GET/POST /catalogs/{catalog_name}/catalog-roles."""

    def __init__(
        self,
        read_catalog_roles: ReadCatalogRolesUseCase,
        create_catalog_role: CreateCatalogRoleUseCase,
    ) -> None:
        self._read = read_catalog_roles
        self._create = create_catalog_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, catalog_name: str
    ) -> None:
        roles = await self._read.list_by_catalog(actor_of(req), catalog_name)
        resp.media = {"roles": [catalog_role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, catalog_name: str
    ) -> None:
        actor = actor_of(req)
        data = nested(await read_body(req), "catalogRole")
        role = await self._create.execute(
            actor, catalog_name, require_field(data, "name"), data.get("properties")
        )
        resp.media = catalog_role_to_dict(role)
        resp.status = falcon.HTTP_201


class CatalogRoleResource:
    """GET/PUT/DELETE /catalogs/{catalog_name}/catalog-roles/{catalog_role_name}."""

    def __init__(
        self,
        read_catalog_roles: ReadCatalogRolesUseCase,
        update_catalog_role: UpdateCatalogRoleUseCase,
        delete_catalog_role: DeleteCatalogRoleUseCase,
    ) -> None:
        self._read = read_catalog_roles
        self._update = update_catalog_role
        self._delete = delete_catalog_role

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        role = await self._read.get(actor_of(req), catalog_name, catalog_role_name)
        resp.media = catalog_role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        actor = actor_of(req)
        body = await read_body(req)
        role = await self._update.execute(
            actor,
            catalog_name,
            catalog_role_name,
            body.get("properties"),
            expected_version(body),
        )
        resp.media = catalog_role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        """Delete the role together with its bindings and grants."""
        await self._delete.execute(
            actor_of(req), catalog_name, catalog_role_name, version_param(req)
        )
        resp.status = falcon.HTTP_204


class CatalogRolePrincipalRolesResource:
    """GET /catalogs/{catalog_name}/catalog-roles/{catalog_role_name}/principal-roles."""

    def __init__(self, read_catalog_roles: ReadCatalogRolesUseCase) -> None:
        self._read = read_catalog_roles

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        catalog_name: str,
        catalog_role_name: str,
    ) -> None:
        roles = await self._read.principal_roles(actor_of(req), catalog_name, catalog_role_name)
        resp.media = {"roles": [principal_role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200
