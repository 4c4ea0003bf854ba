"""Filesystem helpers shared by the home directory and its derived paths."""

from __future__ import annotations

import os
import stat
from pathlib import Path

DIR_MODE = 0o755


def path_exists(path: Path) -> bool:
    """True if anything occupies *path*, including a dangling symlink."""
    return os.path.lexists(path)


def is_real_dir(path: Path) -> bool:
    """True if *path* is a directory and not a symlink to one.

    A missing path is False; any other ``lstat`` failure propagates.
    """
    try:
        mode = os.lstat(path).st_mode
    except FileNotFoundError:
        return False
    return stat.S_ISDIR(mode)


def is_empty_dir(path: Path) -> bool:
    with os.scandir(path) as entries:
        return next(entries, None) is None


def ensure_dir(path: Path, name: str, error_cls: type[Exception]) -> Path:
    """Create *path* if absent, otherwise require it to be a directory.

    Parameters:
        path: Directory to create or validate.
        name: Short label used in error messages (``versions``, ``temp``).
        error_cls: The exception class to raise on any failure.

    Returns:
        *path*, guaranteed to be an existing directory.
    """
    if not path_exists(path):
        try:
            path.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
        except OSError as e:
            raise error_cls(f"Can't create {name} directory {path}: {e}") from e
    else:
        try:
            is_dir = is_real_dir(path)
        except OSError as e:
            raise error_cls(f"Can't check {name} path {path}: {e}") from e
        if not is_dir:
            raise error_cls(f"Invalid {name} path, {path} is not a directory")
    return path


def touch_empty(path: Path, error_cls: type[Exception], what: str) -> None:
    """Create a zero-byte file at *path*, truncating any existing file."""
    try:
        with open(path, "wb"):
            pass
    except OSError as e:
        raise error_cls(f"Can't create {what} {path}: {e}") from e
