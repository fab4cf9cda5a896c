"""Application entry point and composition root."""

import logging
from functools import partial

from falcon.asgi import App

from catalogacl import __version__
from catalogacl.config import Settings, get_settings
from catalogacl.infrastructure.access.access_checker import GrantAccessChecker
from catalogacl.infrastructure.persistence.memory.store import MemoryStore
from catalogacl.infrastructure.persistence.memory.unit_of_work import create_memory_uow_factory
from catalogacl.infrastructure.persistence.postgres.connection import create_pool, ping
from catalogacl.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from catalogacl.interfaces.api.app import create_app
from catalogacl.interfaces.api.middleware.cors import CORSMiddleware
from catalogacl.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from catalogacl.interfaces.api.resources.health import HealthResource

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_catalogacl_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings)

    middleware: list = [CORSMiddleware(settings.cors_origin_list)]
    if settings.storage_backend == "memory":
        uow_factory = create_memory_uow_factory(MemoryStore())
        health = HealthResource()
    else:
        pool = create_pool(
            settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        uow_factory = create_uow_factory(pool)
        health = HealthResource(partial(ping, pool))
        middleware.append(PoolLifespanMiddleware(pool))

    access_checker = GrantAccessChecker(uow_factory, settings.service_admin_names)
    logger.info(
        "catalogacl v%s starting (%s storage, %s)",
        __version__,
        settings.storage_backend,
        settings.environment,
    )
    return create_app(uow_factory, access_checker, middleware=middleware, health_resource=health)


def main() -> None:
    """CLI entry point - run the API under uvicorn."""
    import uvicorn

    uvicorn.run(create_catalogacl_app(), host="0.0.0.0", port=8000)
