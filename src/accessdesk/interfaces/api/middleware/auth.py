"""Auth middleware - resolves the bearer token to a CurrentUser."""

import falcon.asgi

from accessdesk.application.ports import IdentityProvider


class AuthMiddleware:
    """Middleware that sets req.context.user, or None when unauthenticated."""

    def __init__(self, identity_provider: IdentityProvider | None = None) -> None:
        self._identity = identity_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer ") and self._identity:
            req.context.user = self._identity.authenticate(auth[7:])
