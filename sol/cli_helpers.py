"""Shared CLI helpers for sol commands."""

import sys
from typing import Optional

from sol.common.config import SolSettings
from sol.common.constants import ExitCodes
from sol.common.errors import (
    ArchiveFilesystemError,
    DownloadError,
    ExtractionError,
    InvalidVersionError,
    NoVersionsInstalledError,
    UnsupportedPlatformError,
    VersionAlreadyInstalledError,
    VersionNotInstalledError,
)
from sol.core.versions import VersionManager


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to sol exit codes."""
    if isinstance(exc, VersionAlreadyInstalledError):
        return ExitCodes.VERSION_ALREADY_INSTALLED
    if isinstance(exc, VersionNotInstalledError):
        return ExitCodes.VERSION_NOT_INSTALLED
    if isinstance(exc, NoVersionsInstalledError):
        return ExitCodes.NO_VERSIONS_INSTALLED
    if isinstance(exc, InvalidVersionError):
        return ExitCodes.INVALID_VERSION
    if isinstance(exc, DownloadError):
        return ExitCodes.DOWNLOAD_FAILED
    if isinstance(exc, UnsupportedPlatformError):
        return ExitCodes.UNSUPPORTED_PLATFORM
    if isinstance(exc, ArchiveFilesystemError):
        return ExitCodes.FILESYSTEM_ERROR
    if isinstance(exc, ExtractionError):
        return ExitCodes.EXTRACTION_FAILED
    if isinstance(exc, OSError):
        return ExitCodes.FILESYSTEM_ERROR
    return None


def get_manager(args) -> VersionManager:
    """Build the version manager for a parsed command line."""
    settings = getattr(args, "settings", None)
    if not isinstance(settings, SolSettings):
        settings = SolSettings()
    return VersionManager.from_settings(settings)


def run_guarded(action, args, failure_prefix: str) -> None:
    """Run a command action, turning known errors into an exit code."""
    try:
        action(args)
    except Exception as exc:
        exit_code = map_exception_to_exit_code(exc)
        message = str(exc)
        if exit_code is None:
            message = f"{failure_prefix}: {exc}"
            exit_code = ExitCodes.GENERAL_ERROR
        exit_with_error(message, exit_code)
