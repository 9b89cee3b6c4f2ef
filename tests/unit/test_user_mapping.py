"""Unit tests for OIDC user mapping and the Keycloak provider."""

from unittest.mock import patch

import pytest
from keycloak.exceptions import KeycloakError

from accessdesk.domain.value_objects import PlatformRole, parse_platform_role
from accessdesk.infrastructure.auth.keycloak_provider import KeycloakProvider
from accessdesk.infrastructure.auth.oidc_user import OIDCUser
from accessdesk.infrastructure.auth.user_mapping import map_oidc_user, resolve_role


def _user(**kwargs) -> OIDCUser:
    defaults = {"user_id": "u1", "email": "ayse@example.com", "username": "ayse"}
    defaults.update(kwargs)
    return OIDCUser(**defaults)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("system_owner", PlatformRole.SYSTEM_OWNER),
        ("System Owner", PlatformRole.SYSTEM_OWNER),
        (" CEO ", PlatformRole.CEO),
        ("staff", PlatformRole.STAFF),
        ("root", None),
        (None, None),
        (3, None),
    ],
)
def test_parse_platform_role(value, expected) -> None:
    assert parse_platform_role(value) == expected


def test_resolve_role_prefers_role_claim() -> None:
    user = _user(claims={"role": "ceo"}, realm_roles=["admin"])
    assert resolve_role(user, {"ayse@example.com": "staff"}) == PlatformRole.CEO


def test_resolve_role_falls_back_to_realm_roles() -> None:
    user = _user(realm_roles=["offline_access", "admin"])
    assert resolve_role(user, {}) == PlatformRole.ADMIN


def test_resolve_role_uses_email_override_case_insensitively() -> None:
    user = _user(email="Owner@Example.com")
    assert resolve_role(user, {"owner@example.com": "system_owner"}) == PlatformRole.SYSTEM_OWNER


def test_resolve_role_defaults_to_viewer() -> None:
    user = _user(claims={"role": "wizard"})
    assert resolve_role(user, {}) == PlatformRole.VIEWER


def test_map_oidc_user_display_fields() -> None:
    user = _user(claims={"name": "Ayşe Yılmaz", "title": "CFO", "role": "ceo"})
    current = map_oidc_user(user)

    assert current.id == "u1"
    assert current.email == "ayse@example.com"
    assert current.full_name == "Ayşe Yılmaz"
    assert current.title == "CFO"
    assert current.role == PlatformRole.CEO


def test_map_oidc_user_fallbacks() -> None:
    current = map_oidc_user(_user(username=None))
    assert current.full_name == "ayse"
    assert current.title == "Kullanıcı"
    assert current.role == PlatformRole.VIEWER


def test_map_oidc_user_without_email() -> None:
    current = map_oidc_user(_user(email=None, username=None))
    assert current.email == ""
    assert current.full_name == "Kullanıcı"


# --- KeycloakProvider ---


@pytest.fixture
def provider() -> KeycloakProvider:
    return KeycloakProvider(
        server_url="http://keycloak:8080",
        realm="gmw",
        client_id="accessdesk-api",
        client_secret="secret",
        role_overrides={"boss@example.com": "ceo"},
    )


def test_authenticate_active_token(provider: KeycloakProvider) -> None:
    token_info = {
        "active": True,
        "sub": "kc-1",
        "email": "boss@example.com",
        "preferred_username": "boss",
        "realm_access": {"roles": ["offline_access"]},
    }
    with patch.object(provider._keycloak, "introspect", return_value=token_info):
        user = provider.authenticate("token")

    assert user.id == "kc-1"
    assert user.full_name == "boss"
    assert user.role == PlatformRole.CEO


def test_authenticate_inactive_token(provider: KeycloakProvider) -> None:
    with patch.object(provider._keycloak, "introspect", return_value={"active": False}):
        assert provider.authenticate("token") is None


def test_authenticate_introspection_error(provider: KeycloakProvider) -> None:
    with patch.object(provider._keycloak, "introspect", side_effect=KeycloakError("down")):
        assert provider.authenticate("token") is None
