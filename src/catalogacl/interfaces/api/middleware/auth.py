"""Auth middleware - resolves the acting principal from the gateway header."""

from dataclasses import dataclass

import falcon.asgi

PRINCIPAL_HEADER = "X-Principal-Name"


@dataclass
class RequestActor:
    """Principal on whose behalf the request runs."""

    principal_name: str


class AuthMiddleware:
    """Middleware that sets req.context.actor from the authenticated gateway header.

    Token validation happens upstream; a request without the header has no
    actor and is rejected by the resources with 401.
    """

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract actor from the principal header."""
        name = (req.get_header(PRINCIPAL_HEADER) or "").strip()
        req.context.actor = RequestActor(principal_name=name) if name else None
