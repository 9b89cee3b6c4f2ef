"""Outcome of a role store load or save."""

from enum import StrEnum


class PersistenceStatus(StrEnum):
    """LOADED/DEFAULTED/CORRUPT/FAILED for loads, SAVED/FAILED for saves."""

    LOADED = "loaded"
    DEFAULTED = "defaulted"
    CORRUPT = "corrupt"
    SAVED = "saved"
    FAILED = "failed"
