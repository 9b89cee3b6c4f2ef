"""Map OIDC users to CurrentUser with a platform role."""

from accessdesk.domain.entities import CurrentUser
from accessdesk.domain.value_objects import PlatformRole, parse_platform_role
from accessdesk.infrastructure.auth.oidc_user import OIDCUser

DEFAULT_DISPLAY = "Kullanıcı"


def resolve_role(user: OIDCUser, role_overrides: dict[str, str]) -> PlatformRole:
    """Role claim, then realm roles, then the email override table, then viewer."""
    role = parse_platform_role(user.claims.get("role"))
    if role:
        return role
    for realm_role in user.realm_roles:
        role = parse_platform_role(realm_role)
        if role:
            return role
    email = (user.email or "").lower()
    overrides = {k.lower(): v for k, v in role_overrides.items()}
    role = parse_platform_role(overrides.get(email))
    if role:
        return role
    return PlatformRole.VIEWER


def map_oidc_user(user: OIDCUser, role_overrides: dict[str, str] | None = None) -> CurrentUser:
    """Build the CurrentUser seen by route guards."""
    email = user.email or ""
    claims = user.claims
    full_name = (
        claims.get("name")
        or user.username
        or email.split("@")[0]
        or DEFAULT_DISPLAY
    )
    title = claims.get("title") or claims.get("role") or DEFAULT_DISPLAY
    return CurrentUser(
        id=user.user_id,
        email=email,
        full_name=str(full_name),
        title=str(title),
        role=resolve_role(user, role_overrides or {}),
    )
