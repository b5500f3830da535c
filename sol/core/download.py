"""Node.js distribution URLs and downloads."""

from __future__ import annotations

import platform
import urllib.error
import urllib.request
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from sol.common.constants import DEFAULT_DOWNLOAD_TIMEOUT
from sol.common.errors import DownloadError, UnsupportedPlatformError
from sol.common.logging_config import get_logger

_log = get_logger(__name__)

_SYSTEMS = {
    "darwin": "darwin",
    "linux": "linux",
}

_MACHINES = {
    "x86_64": "x64",
    "amd64": "x64",
    "arm64": "arm64",
    "aarch64": "arm64",
    "armv7l": "armv7l",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}


def detect_platform(system: Optional[str] = None, machine: Optional[str] = None) -> str:
    """Return the Node.js platform suffix for this host, e.g. ``linux-x64``."""
    system = (system or platform.system()).lower()
    machine = (machine or platform.machine()).lower()
    node_system = _SYSTEMS.get(system)
    node_arch = _MACHINES.get(machine)
    if not node_system or not node_arch:
        raise UnsupportedPlatformError(
            f"No Node.js tarball is published for {system}/{machine}"
        )
    return f"{node_system}-{node_arch}"


def distribution_url(mirror: str, version: str, platform_name: str) -> str:
    """Build the tarball URL for ``version`` (without leading ``v``)."""
    return f"{mirror.rstrip('/')}/v{version}/node-v{version}-{platform_name}.tar.gz"


@contextmanager
def open_distribution(url: str, timeout: int = DEFAULT_DOWNLOAD_TIMEOUT) -> Iterator[BinaryIO]:
    """Open ``url`` and yield the response once the transfer status is OK."""
    _log.debug("Downloading %s", url)
    try:
        response = urllib.request.urlopen(url, timeout=timeout)  # noqa: S310
    except urllib.error.HTTPError as exc:
        raise DownloadError(f"Failed to download file: {exc.code} {exc.reason} ({url})") from exc
    except (urllib.error.URLError, TimeoutError) as exc:
        raise DownloadError(f"Failed to download {url}: {exc}") from exc

    with response:
        # file:// mirrors report no status
        status = getattr(response, "status", None)
        if status is not None and status != 200:
            reason = getattr(response, "reason", "")
            raise DownloadError(f"Failed to download file: {status} {reason} ({url})")
        yield response
