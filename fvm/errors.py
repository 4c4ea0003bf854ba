"""Error types raised while bootstrapping the fvm home directory."""

from __future__ import annotations


class FvmError(Exception):
    """Base error for home resolution and configuration operations."""


class FvmEnvironmentError(FvmError):
    """The platform user-config directory cannot be determined."""


class HomeResolutionError(FvmError):
    """Home resolution was re-entered while a bootstrap was still running."""


class HomeCreationError(FvmError):
    """The home directory could not be created."""


class HomeValidationError(FvmError):
    """An existing path at the home location is not a usable fvm home."""


class MagicFileError(FvmError):
    """The ``.fvmhome`` marker file could not be created."""


class ConfigFileError(FvmError):
    """``config.yaml`` is a directory or symlink, or could not be created."""


class ConfigParseError(FvmError):
    """``config.yaml`` exists but is not a mapping of keys to scalar values."""


class ConfigWriteError(FvmError):
    """``config.yaml`` could not be written back to disk."""


class DerivedDirError(FvmError):
    """A derived directory exists but is not a directory, or cannot be created."""


class WorkingDirError(FvmError):
    """The current working directory cannot be queried."""
