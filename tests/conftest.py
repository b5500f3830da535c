"""Shared fixtures: in-memory Node.js style tarballs."""

from __future__ import annotations

import gzip
import io
import os
import sys
import tarfile
from typing import Iterable, Optional

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def file_entry(name: str, data: bytes = b"", mode: int = 0o644) -> dict:
    return {"name": name, "type": tarfile.REGTYPE, "data": data, "mode": mode}


def dir_entry(name: str, mode: int = 0o755) -> dict:
    return {"name": name, "type": tarfile.DIRTYPE, "mode": mode}


def symlink_entry(name: str, linkname: str) -> dict:
    return {"name": name, "type": tarfile.SYMTYPE, "linkname": linkname, "mode": 0o777}


def build_tar(entries: Iterable[dict], fmt: int = tarfile.PAX_FORMAT) -> bytes:
    """Build an uncompressed tar archive from entry dicts."""
    raw = io.BytesIO()
    with tarfile.open(fileobj=raw, mode="w", format=fmt) as tar:
        for entry in entries:
            info = tarfile.TarInfo(entry["name"])
            info.type = entry.get("type", tarfile.REGTYPE)
            info.mode = entry.get("mode", 0o644)
            info.linkname = entry.get("linkname", "")
            data: Optional[bytes] = entry.get("data")
            if info.type == tarfile.REGTYPE:
                data = data or b""
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
            else:
                tar.addfile(info)
    return raw.getvalue()


def build_tarball(entries: Iterable[dict], fmt: int = tarfile.PAX_FORMAT) -> bytes:
    """Build a gzip-compressed tar archive from entry dicts."""
    return gzip.compress(build_tar(entries, fmt=fmt))


NODE_TOP = "node-v20.11.0-linux-x64"


def node_distribution_entries(top: str = NODE_TOP) -> list:
    return [
        dir_entry(f"{top}/"),
        dir_entry(f"{top}/bin/"),
        file_entry(f"{top}/bin/node", b"#!/bin/sh\necho node\n", mode=0o755),
        symlink_entry(f"{top}/bin/npm", "../lib/node_modules/npm/bin/npm-cli.js"),
        dir_entry(f"{top}/lib/"),
        file_entry(f"{top}/lib/node_modules/npm/bin/npm-cli.js", b"// npm\n", mode=0o755),
        file_entry(f"{top}/README.md", b"# Node.js\n"),
    ]


@pytest.fixture
def node_tarball(tmp_path):
    """Write a small Node.js style distribution to disk and return its path."""
    path = tmp_path / "node-v20.11.0-linux-x64.tar.gz"
    path.write_bytes(build_tarball(node_distribution_entries()))
    return path


@pytest.fixture
def sol_home(tmp_path, monkeypatch):
    """Point SOL_HOME at a scratch directory."""
    home = tmp_path / "sol-home"
    monkeypatch.setenv("SOL_HOME", str(home))
    monkeypatch.setenv("SOL_PLATFORM", "linux-x64")
    monkeypatch.delenv("SOL_MIRROR", raising=False)
    monkeypatch.delenv("SOL_STRICT_LINKS", raising=False)
    return home
