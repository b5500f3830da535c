from __future__ import annotations

import logging

import pytest

from sol.cli import create_parser, main as cli_main
from sol.cli_helpers import map_exception_to_exit_code
from sol.common.constants import ExitCodes
from sol.common.logging_config import configure_logging
from sol.common.errors import (
    ArchiveFilesystemError,
    DecompressionError,
    DownloadError,
    InvalidVersionError,
    NoVersionsInstalledError,
    PathTraversalError,
    UnsupportedEntryTypeError,
    VersionAlreadyInstalledError,
    VersionNotInstalledError,
)


def run_cli(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli_main(argv)
    return excinfo.value.code


def test_no_arguments_prints_help(capsys):
    assert run_cli([]) == ExitCodes.OK
    assert "install" in capsys.readouterr().out


def test_parser_registers_commands():
    parser = create_parser()
    args = parser.parse_args(["install", "20.11.0", "--archive", "node.tar.gz", "--no-use"])
    assert args.command == "install"
    assert args.archive == "node.tar.gz"
    assert args.activate is False


def test_install_use_and_list(sol_home, node_tarball, tmp_path, capsys):
    cli_main(["install", "20.11.0", "--archive", str(node_tarball)])
    assert "Node.js version 20.11.0 installed successfully" in capsys.readouterr().out

    cli_main(["install", "18.19.0", "--archive", str(node_tarball), "--no-use"])
    capsys.readouterr()

    cli_main(["ls"])
    out = capsys.readouterr().out
    assert "Installed versions:" in out
    assert "  v18.19.0\n" in out
    assert "  v20.11.0 (current)" in out

    cli_main(["use", "v18.19.0"])
    assert "Node.js version v18.19.0 is now in use" in capsys.readouterr().out

    cli_main(["ls"])
    assert "  v18.19.0 (current)" in capsys.readouterr().out
    assert (sol_home / "bin" / "node").exists()


def test_remove_active_version(sol_home, node_tarball, capsys):
    cli_main(["install", "20.11.0", "--archive", str(node_tarball)])
    capsys.readouterr()

    cli_main(["remove", "20.11.0"])
    out = capsys.readouterr().out
    assert "removed successfully" in out
    assert "No version is active anymore" in out
    assert not (sol_home / "bin").is_symlink()


def test_install_existing_version_fails(sol_home, node_tarball, capsys):
    cli_main(["install", "20.11.0", "--archive", str(node_tarball)])
    capsys.readouterr()

    assert run_cli(["install", "20.11.0", "--archive", str(node_tarball)]) == ExitCodes.VERSION_ALREADY_INSTALLED
    assert "Error: Version 20.11.0 is already installed" in capsys.readouterr().err


def test_use_missing_version_fails(sol_home, capsys):
    assert run_cli(["use", "20.11.0"]) == ExitCodes.VERSION_NOT_INSTALLED
    assert "is not installed" in capsys.readouterr().err


def test_list_without_versions_fails(sol_home, capsys):
    assert run_cli(["ls"]) == ExitCodes.NO_VERSIONS_INSTALLED
    assert "No versions installed" in capsys.readouterr().err


def test_invalid_version_fails(sol_home, capsys):
    assert run_cli(["remove", "../etc"]) == ExitCodes.INVALID_VERSION
    assert "Invalid version" in capsys.readouterr().err


def test_broken_archive_fails_extraction(sol_home, tmp_path, capsys):
    broken = tmp_path / "broken.tar.gz"
    broken.write_bytes(b"garbage")

    assert run_cli(["install", "20.11.0", "--archive", str(broken)]) == ExitCodes.EXTRACTION_FAILED
    assert "gzip" in capsys.readouterr().err
    assert list((sol_home / "versions").iterdir()) == []


def test_missing_archive_is_filesystem_error(sol_home, tmp_path, capsys):
    code = run_cli(["install", "20.11.0", "--archive", str(tmp_path / "missing.tar.gz")])
    assert code == ExitCodes.FILESYSTEM_ERROR
    assert "Error: " in capsys.readouterr().err


def test_map_exception_to_exit_code():
    assert map_exception_to_exit_code(VersionAlreadyInstalledError("x")) == ExitCodes.VERSION_ALREADY_INSTALLED
    assert map_exception_to_exit_code(VersionNotInstalledError("x")) == ExitCodes.VERSION_NOT_INSTALLED
    assert map_exception_to_exit_code(NoVersionsInstalledError("x")) == ExitCodes.NO_VERSIONS_INSTALLED
    assert map_exception_to_exit_code(InvalidVersionError("x")) == ExitCodes.INVALID_VERSION
    assert map_exception_to_exit_code(DownloadError("x")) == ExitCodes.DOWNLOAD_FAILED
    assert map_exception_to_exit_code(DecompressionError("x")) == ExitCodes.EXTRACTION_FAILED
    assert map_exception_to_exit_code(PathTraversalError("x")) == ExitCodes.EXTRACTION_FAILED
    assert map_exception_to_exit_code(UnsupportedEntryTypeError("x")) == ExitCodes.EXTRACTION_FAILED
    assert map_exception_to_exit_code(ArchiveFilesystemError("x")) == ExitCodes.FILESYSTEM_ERROR
    assert map_exception_to_exit_code(PermissionError("x")) == ExitCodes.FILESYSTEM_ERROR
    assert map_exception_to_exit_code(RuntimeError("x")) is None


def test_exit_codes():
    assert ExitCodes.OK == 0
    codes = [value for name, value in vars(ExitCodes).items() if name.isupper()]
    assert len(codes) == len(set(codes))


def test_configure_logging_reads_environment(monkeypatch):
    monkeypatch.setenv("SOL_LOG_LEVEL", "debug")
    configure_logging(force=True)
    assert logging.getLogger().level == logging.DEBUG

    monkeypatch.setenv("SOL_LOG_LEVEL", "VERBOSE")
    configure_logging(force=True)
    assert logging.getLogger().level == logging.INFO

    monkeypatch.setenv("SOL_LOG_LEVEL", " error ")
    configure_logging(force=True)
    assert logging.getLogger().level == logging.ERROR

    configure_logging("WARNING", force=True)
    assert logging.getLogger().level == logging.WARNING
    configure_logging("INFO", force=True)
