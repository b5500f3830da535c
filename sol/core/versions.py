"""
Installed Node.js version management for sol.

Handles the on-disk layout under the sol home directory:
* ``versions/v<version>/`` holds one extracted distribution per version
* ``bin`` is a symlink to the ``bin/`` directory of the active version
"""

import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from sol.common.config import SolSettings
from sol.common.constants import (
    ACTIVE_LINK_NAME,
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_MIRROR,
    VERSIONS_DIR_NAME,
)
from sol.common.errors import (
    InvalidVersionError,
    VersionAlreadyInstalledError,
    VersionNotInstalledError,
)
from sol.common.logging_config import get_logger
from sol.core.download import detect_platform, distribution_url, open_distribution
from sol.core.extract import extract
from sol.core.symlinks import read_symlink, swap_symlink

_SAFE_VERSION_PATTERN = re.compile(r"^[0-9][0-9A-Za-z._-]*$")
_STAGING_SUFFIX = ".partial"


def normalize_version(version: str) -> str:
    """
    Normalize a user supplied version to its bare form.

    Args:
        version: A version such as ``20.11.0`` or ``v20.11.0``

    Returns:
        The version without leading ``v``

    Raises:
        InvalidVersionError: If the version is empty or unsafe as a path segment
    """
    candidate = (version or "").strip()
    if candidate[:1] in ("v", "V"):
        candidate = candidate[1:]
    if not _SAFE_VERSION_PATTERN.match(candidate):
        raise InvalidVersionError(f"Invalid version: {version!r}")
    return candidate


class VersionManager:
    """Manages Node.js versions installed under a sol home directory."""

    def __init__(
        self,
        home: Union[str, os.PathLike],
        mirror: str = DEFAULT_MIRROR,
        platform_name: Optional[str] = None,
        timeout: int = DEFAULT_DOWNLOAD_TIMEOUT,
        strict_links: bool = False,
    ):
        """
        Initialize the version manager.

        Args:
            home: Root directory holding versions and the active link
            mirror: Base URL of the Node.js distribution server
            platform_name: Tarball platform suffix; detected lazily when None
            timeout: Download timeout in seconds
            strict_links: Reject unsafe symlink targets while extracting
        """
        self.home = Path(home).absolute()
        self.mirror = mirror
        self._platform_name = platform_name
        self.timeout = timeout
        self.strict_links = strict_links
        self._log = get_logger(__name__)

    @staticmethod
    def from_settings(settings: Optional[SolSettings] = None) -> 'VersionManager':
        """Create a version manager from settings."""
        settings = settings or SolSettings()
        return VersionManager(
            settings.home(),
            mirror=settings.mirror(),
            platform_name=settings.platform(),
            timeout=settings.download_timeout(),
            strict_links=settings.strict_links(),
        )

    @property
    def versions_dir(self) -> Path:
        return self.home / VERSIONS_DIR_NAME

    @property
    def active_link(self) -> Path:
        return self.home / ACTIVE_LINK_NAME

    @property
    def platform_name(self) -> str:
        if self._platform_name is None:
            self._platform_name = detect_platform()
        return self._platform_name

    def ensure_home(self) -> None:
        """Create the versions directory if it does not exist."""
        self.versions_dir.mkdir(parents=True, exist_ok=True)

    def version_dir(self, version: str) -> Path:
        return self.versions_dir / f"v{normalize_version(version)}"

    def is_installed(self, version: str) -> bool:
        return self.version_dir(version).is_dir()

    def download_url(self, version: str) -> str:
        return distribution_url(self.mirror, normalize_version(version), self.platform_name)

    def installed_versions(self) -> List[str]:
        """Return installed version directory names, e.g. ``['v18.19.0', 'v20.11.0']``."""
        if not self.versions_dir.is_dir():
            return []
        names = [
            entry.name
            for entry in self.versions_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        ]
        return sorted(names, key=_version_sort_key)

    def current_version(self) -> Optional[str]:
        """Return the directory name of the active version, if any."""
        target = read_symlink(self.active_link)
        if not target:
            return None
        version_root = Path(target).parent
        if version_root.parent.name != VERSIONS_DIR_NAME:
            return None
        return version_root.name

    def install(
        self,
        version: str,
        archive: Optional[Union[str, os.PathLike]] = None,
        activate: bool = True,
    ) -> Path:
        """
        Install a version, downloading it unless a local archive is given.

        The tarball is unpacked into a hidden staging directory which is only
        renamed into place once extraction succeeded.

        Args:
            version: The version to install
            archive: Optional path of a local ``.tar.gz`` distribution
            activate: Point the active link at the new version

        Returns:
            The version directory

        Raises:
            VersionAlreadyInstalledError: If the version is already installed
        """
        version = normalize_version(version)
        dest = self.version_dir(version)
        if dest.exists():
            raise VersionAlreadyInstalledError(f"Version {version} is already installed")

        self.ensure_home()
        staging = Path(tempfile.mkdtemp(
            prefix=f".{dest.name}.", suffix=_STAGING_SUFFIX, dir=self.versions_dir
        ))
        try:
            os.chmod(staging, 0o755)
            if archive is not None:
                self._log.info("Installing Node.js %s from %s", version, archive)
                with open(archive, "rb") as stream:
                    count = extract(stream, staging, strict_links=self.strict_links)
            else:
                url = self.download_url(version)
                self._log.info("Downloading Node.js %s from %s", version, url)
                with open_distribution(url, self.timeout) as stream:
                    count = extract(stream, staging, strict_links=self.strict_links)
            os.replace(staging, dest)
        except Exception:
            shutil.rmtree(staging, ignore_errors=True)
            raise
        self._log.info("Extracted %d entries into %s", count, dest)

        if activate:
            self._activate(dest)
        return dest

    def use(self, version: str) -> Path:
        """
        Make an installed version the active one.

        Raises:
            VersionNotInstalledError: If the version is not installed
        """
        dest = self.version_dir(version)
        if not dest.is_dir():
            raise VersionNotInstalledError(f"Version {normalize_version(version)} is not installed")
        self._activate(dest)
        return dest

    def remove(self, version: str) -> bool:
        """
        Remove an installed version.

        Returns:
            True if the removed version was the active one

        Raises:
            VersionNotInstalledError: If the version is not installed
        """
        dest = self.version_dir(version)
        if not dest.is_dir():
            raise VersionNotInstalledError(f"Version {normalize_version(version)} is not installed")

        was_active = self.current_version() == dest.name
        if was_active:
            self.active_link.unlink()
            self._log.info("Removed active link %s", self.active_link)

        shutil.rmtree(dest)
        self._log.info("Removed %s", dest)
        return was_active

    def _activate(self, version_root: Path) -> None:
        self.home.mkdir(parents=True, exist_ok=True)
        swap_symlink(version_root / "bin", self.active_link)
        self._log.info("Active version is now %s", version_root.name)


def _version_sort_key(name: str):
    parts = re.split(r"[.\-]", name.lstrip("vV"))
    return [(0, int(part), "") if part.isdigit() else (1, 0, part) for part in parts]
