"""Project settings with atomic writes and precedence resolution.

Directory conventions for an application live in a ``componentry.json``
file at the application root, deserialised into
:class:`~componentry.models.ComponentrySettings`:

* **Project settings** -- :func:`load_project_settings` and
  :func:`save_project_settings`.
* **Precedence resolution** -- :func:`resolve_settings` merges explicit
  arguments, environment variables and the project file into the
  effective settings.

File writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a crash never leaves a truncated settings file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from componentry.exceptions import ConfigError
from componentry.models import ComponentrySettings

SETTINGS_FILENAME = "componentry.json"

_TRUE_VALUES = ("1", "true", "yes", "on")


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project settings ---


def settings_path(app_root: Path) -> Path:
    """Path of the settings file for the application at *app_root*."""
    return Path(app_root) / SETTINGS_FILENAME


def load_project_settings(app_root: Path) -> ComponentrySettings:
    """Load ``componentry.json`` from *app_root*.

    Returns:
        The deserialised settings, or defaults when the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = settings_path(app_root)
    if not path.is_file():
        return ComponentrySettings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ComponentrySettings.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid settings at {path}: {exc}") from exc


def save_project_settings(app_root: Path, settings: ComponentrySettings) -> Path:
    """Persist *settings* atomically to ``<app_root>/componentry.json``.

    Returns:
        The path written.
    """
    path = settings_path(app_root)
    data = settings.model_dump(mode="json")
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


# --- Precedence resolution ---


def resolve_settings(
    app_root: Path,
    verbose: Optional[bool] = None,
    base_dir: Optional[str] = None,
) -> ComponentrySettings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. Explicit arguments (``verbose``, ``base_dir``)
        2. Environment variables (``COMPONENTRY_VERBOSE``, ``COMPONENTRY_BASE_DIR``)
        3. Project settings (``<app_root>/componentry.json``)
        4. Defaults

    Returns:
        The effective :class:`~componentry.models.ComponentrySettings`.
    """
    settings = load_project_settings(app_root)

    env_base_dir = os.environ.get("COMPONENTRY_BASE_DIR")
    if env_base_dir:
        settings.base_dir = env_base_dir
    env_verbose = os.environ.get("COMPONENTRY_VERBOSE")
    if env_verbose:
        settings.verbose = env_verbose.strip().lower() in _TRUE_VALUES

    if base_dir is not None:
        settings.base_dir = base_dir
    if verbose is not None:
        settings.verbose = verbose

    return settings
