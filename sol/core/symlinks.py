"""Atomic replacement of the active version link."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union


def swap_symlink(target: Union[str, os.PathLike], link: Union[str, os.PathLike]) -> None:
    """Point ``link`` at ``target``, replacing any previous link.

    The new link is created under a temporary name next to ``link`` and
    renamed over it, so ``link`` always refers to either the old or the new
    target.
    """
    link_path = Path(link)
    tmp_link = link_path.with_name(f".{link_path.name}.{os.getpid()}.tmp")
    if tmp_link.is_symlink() or tmp_link.exists():
        tmp_link.unlink()
    os.symlink(os.fspath(target), tmp_link)
    try:
        os.replace(tmp_link, link_path)
    except OSError:
        tmp_link.unlink(missing_ok=True)
        raise


def read_symlink(link: Union[str, os.PathLike]) -> Optional[str]:
    """Return the target text of ``link``, or None when it is not a symlink."""
    try:
        return os.readlink(link)
    except OSError:
        return None
