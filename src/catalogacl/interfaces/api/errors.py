"""Rendering of domain errors as API responses."""

import logging

import falcon
import falcon.asgi

from catalogacl.application.error_translation import kind_for_status, message_for, status_message
from catalogacl.domain.exceptions import CatalogAclError, Conflict
from catalogacl.domain.value_objects import ErrorKind

logger = logging.getLogger(__name__)


def error_body(message: str, kind: ErrorKind, code: int) -> dict:
    return {"error": {"message": message, "type": str(kind), "code": code}}


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: CatalogAclError, params: dict
) -> None:
    """Render a domain exception with its kind and status."""
    status = ex.status or 500
    if isinstance(ex, Conflict):
        logger.warning("%s %s: %s", req.method, req.path, ex.message)
    resp.status = status
    resp.media = error_body(message_for(ex), ex.kind, status)


async def handle_http_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: falcon.HTTPError, params: dict
) -> None:
    """Render falcon's own errors (bad query parameters, unknown routes) in the same shape."""
    status = falcon.http_status_to_code(ex.status)
    resp.status = status
    resp.media = error_body(
        ex.description or status_message(status), kind_for_status(status), status
    )


async def handle_unexpected(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    """Log and render anything that escaped the domain error hierarchy."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = error_body(status_message(500), ErrorKind.SERVER_ERROR, 500)
