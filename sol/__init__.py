"""sol - a small Node.js version manager.

Provides:
* Streaming, traversal-safe extraction of Node.js distribution tarballs
* Installing, removing and switching between Node.js versions
* Thin CLI wrapper (`sol`)

The CLI is the primary interface; the helpers exported here can also be used
programmatically.
"""

__version__ = "1.0.0"

from .common.logging_config import configure_logging  # noqa: E402,F401
from .core.extract import extract, extract_file  # noqa: E402,F401
from .core.versions import VersionManager, normalize_version  # noqa: E402,F401

__all__ = [
    "__version__",
    "configure_logging",
    "extract",
    "extract_file",
    "VersionManager",
    "normalize_version",
]

__author__ = "JustAmply"
