"""Protected areas of the dashboard."""

from enum import StrEnum


class Resource(StrEnum):
    """Business resources available to every platform role."""

    DASHBOARD = "dashboard"
    MODULES = "modules"
    PERSONNEL = "personnel"
    PROFILE = "profile"
    SETTINGS = "settings"
    NOTIFICATIONS = "notifications"


class SystemResource(StrEnum):
    """System-tier resources, reserved for the system owner."""

    RBAC = "rbac"
    SETTINGS = "settings"
    RELEASE = "release"
    SECURITY = "security"
    MIGRATION = "migration"
