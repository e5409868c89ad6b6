"""Error types raised around the export engine.

The rendering engine itself never raises: every missing or malformed field
has a default. These exceptions belong to the edges of the system.
"""

from __future__ import annotations


class NameplateError(Exception):
    """Base class for nameplate export failures."""


class ValidationError(NameplateError):
    """The submitted order is unusable (client fault)."""


class ConfigurationError(NameplateError):
    """Required settings or credentials are missing (server fault)."""


class UploadError(NameplateError):
    """Writing a generated artifact to storage failed."""


class NotificationError(NameplateError):
    """The order webhook could not be delivered."""


__all__ = [
    "ConfigurationError",
    "NameplateError",
    "NotificationError",
    "UploadError",
    "ValidationError",
]
