"""Application ports - interfaces for external adapters."""

from accessdesk.application.ports.identity_provider import IdentityProvider
from accessdesk.application.ports.key_value_storage import KeyValueStorage

__all__ = [
    "IdentityProvider",
    "KeyValueStorage",
]
