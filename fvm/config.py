"""In-memory key/value store backed by ``<home>/config.yaml``.

Values read from the file and values written with :meth:`ConfigStore.set`
form the *file layer*, which :meth:`ConfigStore.save` persists. Values
written with :meth:`ConfigStore.inject` form the *runtime layer*: they
shadow the file layer on read and are never written to disk.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from pydantic import RootModel

from fvm._log import get_logger
from fvm._paths import is_real_dir, path_exists, touch_empty
from fvm._yaml import dump_yaml_mapping, load_yaml_model
from fvm.errors import ConfigFileError, ConfigParseError, ConfigWriteError

logger = get_logger("config")

CONFIG_FILENAME = "config.yaml"

Scalar = str | bool | int | float | datetime | date | None


class ConfigDocument(RootModel[dict[str, Scalar]]):
    """A config file: string keys mapped to scalar values."""


def ensure_config_file(path: Path) -> Path:
    """Create an empty config file at *path* unless one already exists.

    A directory or a symlink at *path* is rejected.
    """
    if not path_exists(path):
        touch_empty(path, ConfigFileError, "config file")
        logger.debug("Created config file %s", path)
        return path

    try:
        is_link = path.is_symlink()
        is_dir = is_real_dir(path)
    except OSError as e:
        raise ConfigFileError(f"Can't check config file {path}: {e}") from e
    if is_link:
        raise ConfigFileError(f"Invalid config file, {path} is a symlink")
    if is_dir:
        raise ConfigFileError(f"Invalid config file, {path} is a directory")
    return path


class ConfigStore:
    """Layered key/value configuration for one fvm home."""

    def __init__(self, path: Path, data: dict[str, Scalar] | None = None) -> None:
        self.path = path
        self._data: dict[str, Scalar] = dict(data or {})
        self._runtime: dict[str, Scalar] = {}

    @classmethod
    def load(cls, path: Path) -> ConfigStore:
        """Parse *path* into a new store. An empty file yields an empty store."""
        document = load_yaml_model(path, ConfigDocument, ConfigParseError)
        logger.debug("Loaded %d key(s) from %s", len(document.root), path)
        return cls(path, document.root)

    def __contains__(self, key: object) -> bool:
        return key in self._runtime or key in self._data

    def get(self, key: str, default: Scalar = None) -> Scalar:
        if key in self._runtime:
            return self._runtime[key]
        return self._data.get(key, default)

    def set(self, key: str, value: Scalar) -> None:
        """Set *key* in the file layer. Call :meth:`save` to persist it."""
        self._data[key] = value

    def unset(self, key: str) -> None:
        """Remove *key* from the file layer. Raises ``KeyError`` if absent."""
        del self._data[key]

    def inject(self, key: str, value: Scalar) -> None:
        """Set *key* in the runtime layer only; it is never saved."""
        self._runtime[key] = value

    def is_runtime(self, key: str) -> bool:
        return key in self._runtime

    def persisted(self) -> dict[str, Scalar]:
        """Return a copy of the file layer."""
        return dict(self._data)

    def as_dict(self) -> dict[str, Scalar]:
        """Return the merged view, runtime values shadowing file values."""
        merged = dict(self._data)
        merged.update(self._runtime)
        return merged

    def save(self) -> None:
        """Write the file layer back to :attr:`path`."""
        dump_yaml_mapping(self.path, self._data, ConfigWriteError)
        logger.debug("Saved %d key(s) to %s", len(self._data), self.path)
