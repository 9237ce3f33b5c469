"""
Error taxonomy for driver acquisition and supervision.

Every failure reaches the caller as one of these types; recovery policy
(retry, fallback, user messaging) belongs to the caller.
"""
from __future__ import annotations


class DriverError(Exception):
    """Base class for all driver manager failures."""


class NetworkError(DriverError):
    """Transport failure while talking to the release feed or downloading an asset."""


class DecodeError(DriverError):
    """The release feed answered with a body that is not a release index."""


class ReleaseNotFound(DriverError):
    """No release asset matches the running platform."""

    def __init__(self, message: str = "release not found") -> None:
        super().__init__(message)


class UnsupportedPlatformError(ReleaseNotFound):
    """The running OS/architecture has no known geckodriver build at all."""


class ArchiveError(DriverError):
    """The downloaded archive is corrupt, truncated or could not be written out."""


class SpawnError(DriverError):
    """The installed executable is missing or cannot be started."""
