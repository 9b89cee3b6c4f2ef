"""Keycloak OIDC provider for token introspection."""

import logging

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from accessdesk.domain.entities import CurrentUser
from accessdesk.infrastructure.auth.oidc_user import OIDCUser
from accessdesk.infrastructure.auth.user_mapping import map_oidc_user

logger = logging.getLogger(__name__)


class KeycloakProvider:
    """Keycloak OIDC - validates tokens and resolves the platform role."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        role_overrides: dict[str, str] | None = None,
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._role_overrides = role_overrides or {}

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token, return claims or None when inactive or unverifiable."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
            claims=token_info,
        )

    def authenticate(self, token: str) -> CurrentUser | None:
        user = self.decode_token(token)
        if user is None:
            return None
        return map_oidc_user(user, self._role_overrides)
