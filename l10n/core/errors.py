"""Error taxonomy for bundle configuration.

Lookup misses and unmatched placeholders are *not* errors: ``t()`` never
raises for them.  Only configuration can fail, and a failed configuration
never touches the active bundle.
"""

from __future__ import annotations


class L10nError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationSourceError(L10nError):
    """A bundle source could not be read, fetched or parsed.

    Attributes:
        source: Which kind of source failed (``"contents"``, ``"fs_path"``
            or ``"uri"``).
        location: The path / URI that was being read, if any.
    """

    def __init__(self, message: str, *, source: str, location: str | None = None) -> None:
        super().__init__(message)
        self.source = source
        self.location = location


class BundleFileError(ConfigurationSourceError, OSError):
    """Filesystem failure while reading a bundle (missing, unreadable)."""


class ConfigurationConflictError(L10nError, ValueError):
    """More than one bundle data source was supplied in a single call."""
