"""Environment-backed configuration for sol.

Every setting has a default, so sol works without any configuration:
    - `SOL_HOME`: root of installed versions and the active link
    - `SOL_MIRROR`: base URL distributions are downloaded from
    - `SOL_PLATFORM`: platform suffix of the tarball (detected when unset)
    - `SOL_DOWNLOAD_TIMEOUT`: HTTP timeout in seconds
    - `SOL_STRICT_LINKS`: reject absolute or escaping symlink targets
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from .constants import DEFAULT_DOWNLOAD_TIMEOUT, DEFAULT_MIRROR, DEFAULT_SOL_HOME

_TRUE_VALUES = {"1", "true", "yes", "on"}


class SolSettings:
    """Resolve environment-backed configuration for sol."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    def home(self) -> Path:
        raw = self.get("SOL_HOME") or DEFAULT_SOL_HOME
        return Path(raw).expanduser()

    def mirror(self) -> str:
        return (self.get("SOL_MIRROR") or DEFAULT_MIRROR).rstrip("/")

    def platform(self) -> Optional[str]:
        value = (self.get("SOL_PLATFORM") or "").strip()
        return value or None

    def download_timeout(self) -> int:
        value = self.get("SOL_DOWNLOAD_TIMEOUT")
        if not value:
            return DEFAULT_DOWNLOAD_TIMEOUT
        try:
            timeout = int(value)
        except ValueError:
            return DEFAULT_DOWNLOAD_TIMEOUT
        return timeout if timeout > 0 else DEFAULT_DOWNLOAD_TIMEOUT

    def strict_links(self) -> bool:
        value = self.get("SOL_STRICT_LINKS")
        if value is None:
            return False
        return value.strip().lower() in _TRUE_VALUES
