"""Domain exceptions."""


class AccessDeskError(Exception):
    """Base exception for AccessDesk."""

    pass


class PermissionDenied(AccessDeskError):
    """User does not have permission for the requested action."""

    pass


class NotFound(AccessDeskError):
    """Requested resource was not found."""

    pass


class ValidationError(AccessDeskError):
    """Validation failed for input data."""

    pass


class StorageError(AccessDeskError):
    """Durable key-value storage could not be read or written."""

    pass
