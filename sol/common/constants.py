"""
Constants and exit codes for sol.
"""

import os

DEFAULT_SOL_HOME = os.path.join(os.path.expanduser('~'), '.sol')
DEFAULT_MIRROR = 'https://nodejs.org/download/release'
DEFAULT_DOWNLOAD_TIMEOUT = 30

VERSIONS_DIR_NAME = 'versions'
ACTIVE_LINK_NAME = 'bin'


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    GENERAL_ERROR = 1
    VERSION_ALREADY_INSTALLED = 2
    VERSION_NOT_INSTALLED = 3
    NO_VERSIONS_INSTALLED = 4
    INVALID_VERSION = 5
    DOWNLOAD_FAILED = 6
    EXTRACTION_FAILED = 7
    FILESYSTEM_ERROR = 8
    UNSUPPORTED_PLATFORM = 9
