"""Falcon ASGI application."""

import falcon
import falcon.asgi
from falcon.asgi import App

from catalogacl.application.ports import AccessChecker
from catalogacl.application.use_cases.catalog_role.bind_catalog_role import (
    BindCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.create_catalog_role import (
    CreateCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.delete_catalog_role import (
    DeleteCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.effective_catalog_roles import (
    EffectiveCatalogRolesUseCase,
)
from catalogacl.application.use_cases.catalog_role.read_catalog_roles import (
    ReadCatalogRolesUseCase,
)
from catalogacl.application.use_cases.catalog_role.unbind_catalog_role import (
    UnbindCatalogRoleUseCase,
)
from catalogacl.application.use_cases.catalog_role.update_catalog_role import (
    UpdateCatalogRoleUseCase,
)
from catalogacl.application.use_cases.grant.grant_privilege import GrantPrivilegeUseCase
from catalogacl.application.use_cases.grant.list_grants import ListGrantsUseCase
from catalogacl.application.use_cases.grant.revoke_privilege import RevokePrivilegeUseCase
from catalogacl.application.use_cases.principal.create_principal import CreatePrincipalUseCase
from catalogacl.application.use_cases.principal.delete_principal import DeletePrincipalUseCase
from catalogacl.application.use_cases.principal.read_principals import ReadPrincipalsUseCase
from catalogacl.application.use_cases.principal.update_principal import UpdatePrincipalUseCase
from catalogacl.application.use_cases.principal_role.assign_principal_role import (
    AssignPrincipalRoleUseCase,
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
from catalogacl.application.use_cases.principal_role.revoke_principal_role import (
    RevokePrincipalRoleUseCase,
)
from catalogacl.application.use_cases.principal_role.update_principal_role import (
    UpdatePrincipalRoleUseCase,
)
from catalogacl.domain.exceptions import CatalogAclError
from catalogacl.interfaces.api.errors import (
    handle_domain_error,
    handle_http_error,
    handle_unexpected,
)
from catalogacl.interfaces.api.middleware.auth import AuthMiddleware
from catalogacl.interfaces.api.resources.catalog_roles import (
    CatalogRolePrincipalRolesResource,
    CatalogRoleResource,
    CatalogRolesResource,
)
from catalogacl.interfaces.api.resources.grants import (
    CatalogGrantsResource,
    CatalogRoleGrantsResource,
)
from catalogacl.interfaces.api.resources.health import HealthResource
from catalogacl.interfaces.api.resources.principal_roles import (
    PrincipalRoleCatalogRoleResource,
    PrincipalRoleCatalogRolesResource,
    PrincipalRolePrincipalsResource,
    PrincipalRoleResource,
    PrincipalRolesResource,
)
from catalogacl.interfaces.api.resources.principals import (
    PrincipalCatalogRolesResource,
    PrincipalPrincipalRoleResource,
    PrincipalPrincipalRolesResource,
    PrincipalResource,
    PrincipalsResource,
)

API_PREFIX = "/api/management/v1"


def create_app(
    unit_of_work_factory: type,
    access_checker: AccessChecker,
    middleware: list | None = None,
    health_resource: HealthResource | None = None,
) -> App:
    """Create Falcon ASGI app with use cases, routes and error handlers.

    ``middleware`` runs before actor resolution (CORS, pool lifespan).
    """
    deps = {"unit_of_work_factory": unit_of_work_factory, "access_checker": access_checker}
    read_principals = ReadPrincipalsUseCase(**deps)
    read_principal_roles = ReadPrincipalRolesUseCase(**deps)
    read_catalog_roles = ReadCatalogRolesUseCase(**deps)
    list_grants = ListGrantsUseCase(**deps)

    app = falcon.asgi.App(middleware=[*(middleware or []), AuthMiddleware()])
    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(falcon.HTTPError, handle_http_error)
    app.add_error_handler(CatalogAclError, handle_domain_error)

    health = health_resource or HealthResource()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")

    app.add_route(
        f"{API_PREFIX}/principals",
        PrincipalsResource(read_principals, CreatePrincipalUseCase(**deps)),
    )
    app.add_route(
        f"{API_PREFIX}/principals/{{principal_name}}",
        PrincipalResource(
            read_principals, UpdatePrincipalUseCase(**deps), DeletePrincipalUseCase(**deps)
        ),
    )
    app.add_route(
        f"{API_PREFIX}/principals/{{principal_name}}/principal-roles",
        PrincipalPrincipalRolesResource(read_principals, AssignPrincipalRoleUseCase(**deps)),
    )
    app.add_route(
        f"{API_PREFIX}/principals/{{principal_name}}/principal-roles/{{principal_role_name}}",
        PrincipalPrincipalRoleResource(RevokePrincipalRoleUseCase(**deps)),
    )
    app.add_route(
        f"{API_PREFIX}/principals/{{principal_name}}/catalog-roles",
        PrincipalCatalogRolesResource(EffectiveCatalogRolesUseCase(**deps)),
    )

    app.add_route(
        f"{API_PREFIX}/principal-roles",
        PrincipalRolesResource(read_principal_roles, CreatePrincipalRoleUseCase(**deps)),
    )
    app.add_route(
        f"{API_PREFIX}/principal-roles/{{principal_role_name}}",
        PrincipalRoleResource(
            read_principal_roles,
            UpdatePrincipalRoleUseCase(**deps),
            DeletePrincipalRoleUseCase(**deps),
        ),
    )
    app.add_route(
        f"{API_PREFIX}/principal-roles/{{principal_role_name}}/principals",
        PrincipalRolePrincipalsResource(read_principal_roles),
    )
    app.add_route(
        f"{API_PREFIX}/principal-roles/{{principal_role_name}}/catalog-roles/{{catalog_name}}",
        PrincipalRoleCatalogRolesResource(read_principal_roles, BindCatalogRoleUseCase(**deps)),
    )
    app.add_route(
        f"{API_PREFIX}/principal-roles/{{principal_role_name}}/catalog-roles/{{catalog_name}}"
        "/{catalog_role_name}",
        PrincipalRoleCatalogRoleResource(UnbindCatalogRoleUseCase(**deps)),
    )

    app.add_route(
        f"{API_PREFIX}/catalogs/{{catalog_name}}/catalog-roles",
        CatalogRolesResource(read_catalog_roles, CreateCatalogRoleUseCase(**deps)),
    )
    app.add_route(
        f"{API_PREFIX}/catalogs/{{catalog_name}}/catalog-roles/{{catalog_role_name}}",
        CatalogRoleResource(
            read_catalog_roles,
            UpdateCatalogRoleUseCase(**deps),
            DeleteCatalogRoleUseCase(**deps),
        ),
    )
    app.add_route(
        f"{API_PREFIX}/catalogs/{{catalog_name}}/catalog-roles/{{catalog_role_name}}"
        "/principal-roles",
        CatalogRolePrincipalRolesResource(read_catalog_roles),
    )
    app.add_route(
        f"{API_PREFIX}/catalogs/{{catalog_name}}/catalog-roles/{{catalog_role_name}}/grants",
        CatalogRoleGrantsResource(
            list_grants, GrantPrivilegeUseCase(**deps), RevokePrivilegeUseCase(**deps)
        ),
    )
    app.add_route(
        f"{API_PREFIX}/catalogs/{{catalog_name}}/grants",
        CatalogGrantsResource(list_grants),
    )
    return app
