"""
Custom exception classes for sol.
"""

from typing import Optional


class SolError(Exception):
    """Base exception class for sol errors."""
    pass


class ExtractionError(SolError):
    """Base class for failures while unpacking a distribution tarball."""

    def __init__(self, message: str, entry_name: Optional[str] = None):
        super().__init__(message)
        self.entry_name = entry_name


class DecompressionError(ExtractionError):
    """Raised when the input stream is not readable gzip data."""
    pass


class MalformedArchiveError(ExtractionError):
    """Raised when the decompressed data is not a valid sequence of tar entries."""
    pass


class PathTraversalError(MalformedArchiveError):
    """Raised when an entry would be written outside the destination root."""
    pass


class UnsupportedEntryTypeError(ExtractionError):
    """Raised for entries that are not directories, regular files or symlinks."""
    pass


class ArchiveFilesystemError(ExtractionError):
    """Raised when the filesystem rejects creating an extracted entry."""
    pass


class InvalidVersionError(SolError):
    """Raised when a version identifier is not usable as a directory name."""
    pass


class VersionAlreadyInstalledError(SolError):
    """Raised when installing a version that is already present."""
    pass


class VersionNotInstalledError(SolError):
    """Raised when a command targets a version that is not installed."""
    pass


class NoVersionsInstalledError(SolError):
    """Raised when listing versions and none are installed."""
    pass


class DownloadError(SolError):
    """Raised when a distribution tarball cannot be fetched."""
    pass


class UnsupportedPlatformError(SolError):
    """Raised when no Node.js distribution exists for the current platform."""
    pass
