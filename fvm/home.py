"""Home directory resolution for fvm.

The home directory is ``FVM_HOME`` when set and non-empty, otherwise
``<user config dir>/fvm``. It is validated (or created) once per resolver:

* a missing path is created and marked with ``.fvmhome``;
* an empty directory is adopted and marked;
* a non-empty directory must already carry the marker;
* anything that is not a real directory is rejected.

``config.yaml`` inside the home is created if absent and loaded into a
:class:`~fvm.config.ConfigStore`, with the resolved home injected under the
``FVM_HOME`` key (runtime only, never saved).
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from fvm._log import get_logger
from fvm._paths import DIR_MODE, ensure_dir, is_empty_dir, is_real_dir, path_exists, touch_empty
from fvm.config import CONFIG_FILENAME, ConfigStore, ensure_config_file
from fvm.errors import (
    DerivedDirError,
    FvmEnvironmentError,
    HomeCreationError,
    HomeResolutionError,
    HomeValidationError,
    MagicFileError,
    WorkingDirError,
)

logger = get_logger("home")

HOME_ENV = "FVM_HOME"
HOME_KEY = "FVM_HOME"
MAGIC_FILENAME = ".fvmhome"
VERSIONS_DIRNAME = "versions"
TEMP_DIRNAME = "temp"


@dataclass(frozen=True)
class ResolvedHome:
    home: Path
    config: ConfigStore

    @property
    def config_path(self) -> Path:
        return self.config.path


def user_config_dir() -> Path:
    """Return the OS-conventional per-user configuration root.

    * Windows: ``%AppData%``
    * macOS: ``$HOME/Library/Application Support``
    * others: ``$XDG_CONFIG_HOME`` (must be absolute), else ``$HOME/.config``
    """
    if sys.platform == "win32":
        appdata = os.environ.get("AppData", "")
        if not appdata:
            raise FvmEnvironmentError("Can't get user config dir: %AppData% is not defined")
        return Path(appdata)

    if sys.platform == "darwin":
        home = os.environ.get("HOME", "")
        if not home:
            raise FvmEnvironmentError("Can't get user config dir: $HOME is not defined")
        return Path(home) / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        if not os.path.isabs(xdg):
            raise FvmEnvironmentError(
                f"Can't get user config dir: $XDG_CONFIG_HOME is relative ({xdg})"
            )
        return Path(xdg)
    home = os.environ.get("HOME", "")
    if not home:
        raise FvmEnvironmentError(
            "Can't get user config dir: neither $XDG_CONFIG_HOME nor $HOME are defined"
        )
    return Path(home) / ".config"


def candidate_home() -> Path:
    """Return the absolute home path to validate.

    A relative ``FVM_HOME`` is anchored at the working directory; symlinks
    are left unresolved.
    """
    env = os.environ.get(HOME_ENV, "")
    home = Path(env) if env else user_config_dir() / "fvm"
    if not home.is_absolute():
        home = working_dir() / home
    return home


def _create_magic_file(home: Path) -> None:
    magic = home / MAGIC_FILENAME
    touch_empty(magic, MagicFileError, "magic file")
    logger.debug("Created magic file %s", magic)


def init_home(home: Path) -> Path:
    """Validate *home* as an fvm home directory, creating it if missing."""
    if not path_exists(home):
        try:
            home.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
        except OSError as e:
            raise HomeCreationError(f"Can't create fvm home directory {home}: {e}") from e
        logger.debug("Created fvm home %s", home)
        _create_magic_file(home)
        return home

    try:
        is_dir = is_real_dir(home)
    except OSError as e:
        raise HomeValidationError(f"Can't check fvm home {home}: {e}") from e
    if not is_dir:
        raise HomeValidationError(f"Invalid fvm home, {home} is not a directory")

    try:
        empty = is_empty_dir(home)
        marked = not empty and (home / MAGIC_FILENAME).is_file()
    except OSError as e:
        raise HomeValidationError(f"Can't check fvm home {home}: {e}") from e

    if empty:
        _create_magic_file(home)
    elif not marked:
        raise HomeValidationError(
            f'Invalid fvm home {home}, magic file "{MAGIC_FILENAME}" not present'
        )
    return home


class HomeResolver:
    """Resolve the fvm home and its config exactly once."""

    def __init__(self) -> None:
        self._started = False
        self._resolved: ResolvedHome | None = None
        self._error: Exception | None = None

    @property
    def started(self) -> bool:
        return self._started

    def resolve(self) -> ResolvedHome:
        """Run the bootstrap on first call; later calls return the cached result.

        A failed bootstrap is not retried: the original error, typed or not,
        is raised again.
        """
        if self._resolved is not None:
            return self._resolved
        if self._error is not None:
            raise self._error
        if self._started:
            raise HomeResolutionError("fvm home resolution is already in progress")
        self._started = True

        try:
            home = init_home(candidate_home())
            config_path = ensure_config_file(home / CONFIG_FILENAME)
            config = ConfigStore.load(config_path)
        except Exception as e:
            self._error = e
            raise

        config.inject(HOME_KEY, str(home))
        self._resolved = ResolvedHome(home=home, config=config)
        logger.debug("Resolved fvm home %s", home)
        return self._resolved

    def home(self) -> Path:
        return self.resolve().home

    def config(self) -> ConfigStore:
        return self.resolve().config

    def derived_dir(self, name: str) -> Path:
        """Return ``<home>/<name>``, creating it if absent.

        Not cached: every call re-checks that the path is a directory.
        """
        return ensure_dir(self.home() / name, name, DerivedDirError)

    def versions_dir(self) -> Path:
        return self.derived_dir(VERSIONS_DIRNAME)

    def temp_dir(self) -> Path:
        return self.derived_dir(TEMP_DIRNAME)


@lru_cache(maxsize=1)
def get_resolver() -> HomeResolver:
    """Return the process-wide resolver."""
    return HomeResolver()


def fvm_home() -> Path:
    return get_resolver().home()


def fvm_config() -> ConfigStore:
    return get_resolver().config()


def versions_dir() -> Path:
    return get_resolver().versions_dir()


def temp_dir() -> Path:
    return get_resolver().temp_dir()


def working_dir() -> Path:
    """Return the current working directory."""
    try:
        return Path.cwd()
    except OSError as e:
        raise WorkingDirError(f"Can't get working directory: {e}") from e
