"""Well-known directories and their housekeeping."""

from __future__ import annotations

import functools
import time
from pathlib import Path

from soarpkg.config import get_config
from soarpkg.errors import SoarError
from soarpkg.utils import build_path

CACHE_TTL_SECONDS = 28800


@functools.cache
def root_path() -> Path:
    """Return the root directory for all application data."""
    return build_path(get_config().soar_root)


@functools.cache
def bin_path() -> Path:
    """Return the directory holding binary symlinks."""
    return build_path(get_config().soar_bin)


@functools.cache
def cache_path() -> Path:
    """Return the cache directory."""
    return build_path(get_config().soar_cache)


@functools.cache
def db_path() -> Path:
    """Return the directory holding the installation database."""
    return build_path(get_config().soar_db)


@functools.cache
def repositories_path() -> Path:
    """Return the directory holding repository databases."""
    return build_path(get_config().soar_repositories)


@functools.cache
def packages_path() -> Path:
    """Return the directory where packages are installed."""
    return build_path(get_config().soar_packages)


def setup_required_paths() -> None:
    """Create the binary, database and package directories if they are missing."""
    try:
        for directory in (bin_path(), db_path(), packages_path()):
            directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc


def cleanup() -> None:
    """Drop expired cached binaries, then remove broken binary symlinks."""
    now = time.time()
    try:
        for entry in (cache_path() / "bin").iterdir():
            age = now - entry.stat().st_mtime
            if age < 0:
                raise SoarError(
                    "System time error: second time provided was later than self"
                )
            if age >= CACHE_TTL_SECONDS:
                entry.unlink()
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc
    remove_broken_symlink()


def remove_broken_symlink() -> None:
    """Remove every entry of the binary directory that is not a usable file."""
    try:
        for entry in bin_path().iterdir():
            if not entry.is_file():
                entry.unlink()
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc