"""Exception types raised by the pipeline."""

from __future__ import annotations


class PlayersbError(RuntimeError):
    """Base class for pipeline failures."""


class DataFileError(PlayersbError):
    """A required local data file is missing, unreadable or malformed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class FetchError(PlayersbError):
    """An upstream HTTP request failed."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ConfigError(PlayersbError):
    """Required configuration (usually an API token) is missing."""
