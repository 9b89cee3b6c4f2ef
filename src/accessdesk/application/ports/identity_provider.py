"""Identity provider port - resolves bearer tokens to users."""

from typing import Protocol

from accessdesk.domain.entities import CurrentUser


class IdentityProvider(Protocol):
    """Port for authenticating requests."""

    def authenticate(self, token: str) -> CurrentUser | None: ...
