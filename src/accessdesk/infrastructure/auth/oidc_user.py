"""Authenticated user from an OIDC token, before role resolution."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class OIDCUser:
    """Claims of an active token."""

    user_id: str
    email: str | None
    username: str | None
    realm_roles: list[str] = field(default_factory=list)
    claims: dict[str, Any] = field(default_factory=dict)
