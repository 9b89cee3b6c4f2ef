"""AccessDesk - RBAC and role management for the GMW operations dashboard."""

__version__ = "0.1.0"
