"""Authenticated user as seen by route guards."""

from dataclasses import dataclass

from accessdesk.domain.value_objects import PlatformRole


@dataclass(frozen=True)
class CurrentUser:
    """User resolved from the identity provider, with a platform role."""

    id: str
    email: str
    full_name: str
    title: str
    role: PlatformRole
