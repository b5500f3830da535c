"""Streaming extraction of gzip-compressed Node.js distribution tarballs.

The stream is decompressed and parsed entry by entry; nothing is buffered
beyond the current block. Each entry name loses its leading wrapper directory
(``node-v20.11.0-linux-x64/bin/node`` becomes ``bin/node``) and is joined onto
the destination root. Entries are restricted to directories, regular files and
symlinks, and no entry may resolve outside the destination root.

There is no rollback: when extraction fails, entries written before the
failure stay on disk. Callers wanting all-or-nothing semantics extract into a
staging directory and rename it into place (see ``VersionManager.install``).
"""

from __future__ import annotations

import gzip
import os
import tarfile
import zlib
from pathlib import Path
from typing import BinaryIO, List, Union

from sol.common.errors import (
    ArchiveFilesystemError,
    DecompressionError,
    MalformedArchiveError,
    PathTraversalError,
    UnsupportedEntryTypeError,
)
from sol.common.logging_config import get_logger

_log = get_logger(__name__)

PERMISSION_MASK = 0o777
DEFAULT_DIR_MODE = 0o777
_COPY_BUFSIZE = 64 * 1024

# Errors raised while reading from the decompressed stream. Filesystem writes
# are wrapped separately so an OSError here always means a broken input.
_READ_ERRORS = (tarfile.TarError, EOFError, zlib.error, OSError)


class _CorruptHeader(tarfile.ReadError):
    pass


class _StrictTarInfo(tarfile.TarInfo):
    """TarInfo that refuses corrupt or truncated header blocks.

    ``tarfile`` treats a bad checksum or a short header block after the first
    member as the end of the archive. Raising a non-header error here makes
    ``TarFile.next`` propagate it instead.
    """

    @classmethod
    def frombuf(cls, buf, encoding, errors):
        try:
            return super().frombuf(buf, encoding, errors)
        except (tarfile.InvalidHeaderError, tarfile.TruncatedHeaderError) as exc:
            raise _CorruptHeader(str(exc)) from exc


def strip_entry_name(name: str, is_dir: bool = False, strip_components: int = 1) -> List[str]:
    """Return the path segments of ``name`` below its stripped prefix.

    ``tarfile`` drops the trailing slash of directory names, so directories
    are treated as if it were still present: the wrapper entry ``top/`` strips
    down to no segments at all and maps onto the destination root.

    Raises:
        MalformedArchiveError: If nothing is left after stripping (directories
            excepted, they map onto the root).
        PathTraversalError: If any segment is ``..``.
    """
    raw = name + "/" if is_dir and not name.endswith("/") else name
    parts = raw.split("/")
    if len(parts) <= strip_components:
        raise MalformedArchiveError(f"invalid tar header name: {name!r}", entry_name=name)

    segments = [part for part in parts[strip_components:] if part not in ("", ".")]
    if not segments and not is_dir:
        raise MalformedArchiveError(f"tar entry {name!r} has no path below its prefix", entry_name=name)
    if ".." in segments:
        raise PathTraversalError(
            f"tar entry {name!r} contains a parent directory reference", entry_name=name
        )
    return segments


def _ensure_within(root: Path, path: Path, name: str) -> None:
    resolved = path.resolve()
    if resolved != root and root not in resolved.parents:
        raise PathTraversalError(
            f"tar entry {name!r} resolves outside of {root}", entry_name=name
        )


def resolve_target(root: Path, name: str, is_dir: bool = False, strip_components: int = 1) -> Path:
    """Map an entry name onto a path under ``root``.

    ``root`` must already be resolved. Existing symlinks on the way are
    followed when checking containment, so an earlier entry cannot redirect a
    later one outside the root.
    """
    segments = strip_entry_name(name, is_dir=is_dir, strip_components=strip_components)
    target = root.joinpath(*segments)
    if is_dir:
        _ensure_within(root, target, name)
    else:
        # The leaf itself is replaced rather than followed when it is a link.
        _ensure_within(root, target.parent, name)
    return target


def _check_link_target(root: Path, link_path: Path, linkname: str, name: str) -> None:
    if os.path.isabs(linkname):
        raise PathTraversalError(
            f"symlink {name!r} has absolute target {linkname!r}", entry_name=name
        )
    resolved = Path(os.path.normpath(os.path.join(link_path.parent, linkname)))
    if resolved != root and root not in resolved.parents:
        raise PathTraversalError(
            f"symlink {name!r} points outside of {root}: {linkname!r}", entry_name=name
        )


class _ReplayStream:
    """Read-only view of ``stream`` that first hands back bytes already read."""

    def __init__(self, head: bytes, stream: BinaryIO):
        self._head = head
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        if not self._head:
            return self._stream.read(size)
        if size is None or size < 0:
            data, self._head = self._head + self._stream.read(), b""
            return data
        data, self._head = self._head[:size], self._head[size:]
        return data


def _open_gzip(stream: BinaryIO) -> gzip.GzipFile:
    # Only a stream without a single byte fails before the gzip header is
    # parsed. A gzip member that decompresses to nothing is an empty archive.
    try:
        head = stream.read(2)
    except OSError as exc:
        raise DecompressionError(f"failed to create gzip reader: {exc}") from exc
    if not head:
        raise DecompressionError("failed to create gzip reader: unexpected end of stream")

    gz = gzip.GzipFile(fileobj=_ReplayStream(head, stream), mode="rb")
    try:
        gz.peek(1)
    except (EOFError, zlib.error, OSError) as exc:
        gz.close()
        raise DecompressionError(f"failed to create gzip reader: {exc}") from exc
    return gz


def _next_member(archive: tarfile.TarFile):
    try:
        return archive.next()
    except _READ_ERRORS as exc:
        raise MalformedArchiveError(f"failed to read tar header: {exc}") from exc


def _make_directory(target: Path, mode: int, name: str) -> None:
    try:
        target.mkdir(parents=True, exist_ok=True)
        os.chmod(target, mode)
    except OSError as exc:
        raise ArchiveFilesystemError(
            f"failed to create directory {target}: {exc}", entry_name=name
        ) from exc


def _write_file(archive: tarfile.TarFile, member: tarfile.TarInfo, target: Path) -> None:
    name = member.name
    try:
        target.parent.mkdir(parents=True, exist_ok=True, mode=DEFAULT_DIR_MODE)
        if target.is_symlink():
            target.unlink()
        out_file = open(target, "wb")
    except OSError as exc:
        raise ArchiveFilesystemError(
            f"failed to create file {target}: {exc}", entry_name=name
        ) from exc

    with out_file:
        try:
            source = archive.extractfile(member)
        except _READ_ERRORS as exc:
            raise MalformedArchiveError(
                f"failed to read data of {name!r}: {exc}", entry_name=name
            ) from exc
        remaining = member.size
        while remaining > 0:
            try:
                chunk = source.read(min(_COPY_BUFSIZE, remaining))
            except _READ_ERRORS as exc:
                raise MalformedArchiveError(
                    f"failed to extract file {name!r}: {exc}", entry_name=name
                ) from exc
            if not chunk:
                raise MalformedArchiveError(
                    f"unexpected end of data in {name!r}: {remaining} of {member.size} bytes missing",
                    entry_name=name,
                )
            try:
                out_file.write(chunk)
            except OSError as exc:
                raise ArchiveFilesystemError(
                    f"failed to write file {target}: {exc}", entry_name=name
                ) from exc
            remaining -= len(chunk)

    try:
        os.chmod(target, member.mode & PERMISSION_MASK)
    except OSError as exc:
        raise ArchiveFilesystemError(
            f"failed to set file permissions on {target}: {exc}", entry_name=name
        ) from exc


def _make_symlink(target: Path, linkname: str, name: str) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True, mode=DEFAULT_DIR_MODE)
        if target.is_symlink():
            target.unlink()
        os.symlink(linkname, target)
    except OSError as exc:
        raise ArchiveFilesystemError(
            f"failed to create symlink {target} -> {linkname}: {exc}", entry_name=name
        ) from exc


def _extract_members(gz: gzip.GzipFile, root: Path, strip_components: int, strict_links: bool) -> int:
    try:
        archive = tarfile.open(fileobj=gz, mode="r|", tarinfo=_StrictTarInfo)
    except _READ_ERRORS as exc:
        raise MalformedArchiveError(f"failed to read tar header: {exc}") from exc

    count = 0
    with archive:
        while True:
            member = _next_member(archive)
            if member is None:
                break
            # Stream mode still records every header it reads.
            archive.members = []

            name = member.name
            target = resolve_target(
                root, name, is_dir=member.isdir(), strip_components=strip_components
            )

            if member.isdir():
                _make_directory(target, member.mode & PERMISSION_MASK, name)
            elif member.isreg():
                _write_file(archive, member, target)
            elif member.issym():
                if strict_links:
                    _check_link_target(root, target, member.linkname, name)
                _make_symlink(target, member.linkname, name)
            else:
                raise UnsupportedEntryTypeError(
                    f"unsupported tar header type {member.type!r} for {name!r}",
                    entry_name=name,
                )
            count += 1
    return count


def extract(
    stream: BinaryIO,
    destination: Union[str, os.PathLike],
    *,
    strip_components: int = 1,
    strict_links: bool = False,
) -> int:
    """Extract a gzip-compressed tarball from ``stream`` into ``destination``.

    Args:
        stream: Readable binary stream positioned at the start of the gzip
            data. It is not closed here.
        destination: Directory to extract into. Created on demand, but only
            once the stream is known to be gzip data.
        strip_components: Number of leading path segments dropped from every
            entry name.
        strict_links: Reject symlinks with absolute targets or targets that
            resolve outside ``destination``. Targets are written verbatim
            otherwise.

    Returns:
        The number of entries written.

    Raises:
        DecompressionError: The stream is empty or is not gzip data. A gzip
            stream that decompresses to nothing is an empty archive.
        MalformedArchiveError: Corrupt, truncated or unsafe archive content.
        UnsupportedEntryTypeError: An entry is not a directory, regular file
            or symlink. Later entries are not processed.
        ArchiveFilesystemError: Creating an entry on disk failed.
    """
    gz = _open_gzip(stream)
    try:
        root_path = Path(destination)
        try:
            root_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArchiveFilesystemError(
                f"failed to create destination {root_path}: {exc}"
            ) from exc
        root = root_path.resolve()

        count = 0
        if gz.peek(1):
            count = _extract_members(gz, root, strip_components, strict_links)
    finally:
        gz.close()

    _log.debug("Extracted %d entries into %s", count, root)
    return count


def extract_file(
    archive_path: Union[str, os.PathLike],
    destination: Union[str, os.PathLike],
    **kwargs,
) -> int:
    """Extract a ``.tar.gz`` file from disk; see :func:`extract`."""
    with open(archive_path, "rb") as stream:
        return extract(stream, destination, **kwargs)


__all__ = ["extract", "extract_file", "resolve_target", "strip_entry_name"]
