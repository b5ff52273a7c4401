"""Host application contract and an in-process reference host.

componentry does not own the application it configures. It talks to the
host through the small surface described by :class:`Host`:

* ``config`` -- autoload and eager-load path lists, named path collections,
  ``after_initialize`` callbacks and a free-form ``x`` namespace;
* ``autoloader`` -- ``collapse`` and ``ignore`` pattern registration;
* ``reloader`` -- ``before_class_unload`` and ``to_prepare`` callbacks;
* ``initializer`` -- registration of a named startup callback.

:class:`Application` implements that surface without any framework behind
it. The CLI boots it, tests drive it, and embedding projects can subclass
it or adapt their own framework object to the protocol.

Autoloader patterns are gitignore-style wildcards evaluated relative to
the application root (``components/*/_components``,
``components/**/routes.py``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Protocol, runtime_checkable

import pathspec

Callback = Callable[[Any], None]

DEVELOPMENT = "development"


# ------------------------------------------------------------------ #
# Protocols
# ------------------------------------------------------------------ #


@runtime_checkable
class Host(Protocol):
    """What componentry needs from a host application."""

    root: Path
    env: str
    logger: Optional[logging.Logger]
    config: Any
    autoloader: Any
    reloader: Any

    def initializer(self, name: str, callback: Callback, group: str = "default") -> None:
        ...


# ------------------------------------------------------------------ #
# Path collections
# ------------------------------------------------------------------ #


class PathCollection:
    """An ordered list of filesystem paths registered under one key."""

    def __init__(self, eager_load: bool = False) -> None:
        self.entries: list[str] = []
        self.eager_load = eager_load

    def push(self, *paths: str) -> None:
        for path in paths:
            if path not in self.entries:
                self.entries.append(path)

    def unshift(self, *paths: str) -> None:
        self.entries = [p for p in paths if p not in self.entries] + self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"PathCollection({self.entries!r}, eager_load={self.eager_load})"


class PathRoot:
    """Named path collections, created on first access."""

    def __init__(self) -> None:
        self._collections: dict[str, PathCollection] = {}

    def __getitem__(self, key: str) -> PathCollection:
        if key not in self._collections:
            self._collections[key] = PathCollection()
        return self._collections[key]

    def __contains__(self, key: object) -> bool:
        return key in self._collections

    def add(self, key: str, eager_load: bool = False) -> PathCollection:
        """Register *key* as a path entry of its own (``paths.add(dir, eager_load=True)``)."""
        collection = self[key]
        collection.eager_load = collection.eager_load or eager_load
        collection.push(key)
        return collection

    def keys(self) -> list[str]:
        return list(self._collections)

    def eager_load_entries(self) -> list[str]:
        return [
            entry
            for collection in self._collections.values()
            if collection.eager_load
            for entry in collection
        ]


# ------------------------------------------------------------------ #
# Configuration, autoloader, reloader
# ------------------------------------------------------------------ #


class HostConfig:
    """Configuration object of the reference host."""

    def __init__(self) -> None:
        self.autoload_paths: list[str] = []
        self.eager_load_paths: list[str] = []
        self.paths = PathRoot()
        self.x: dict[str, Any] = {}
        self._after_initialize: list[Callback] = []

    def after_initialize(self, callback: Callback) -> Callback:
        self._after_initialize.append(callback)
        return callback

    def run_after_initialize(self, app: Any) -> None:
        for callback in self._after_initialize:
            callback(app)


def _spec(patterns: list[str]) -> pathspec.PathSpec:
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


class Autoloader:
    """Records collapse and ignore patterns relative to *root*."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.collapsed: list[str] = []
        self.ignored: list[str] = []

    def collapse(self, pattern: str) -> None:
        if pattern not in self.collapsed:
            self.collapsed.append(pattern)

    def ignore(self, pattern: str) -> None:
        if pattern not in self.ignored:
            self.ignored.append(pattern)

    def _relative(self, path: Path | str) -> str:
        path = Path(path)
        if path.is_absolute():
            path = path.relative_to(self.root)
        return path.as_posix()

    def is_collapsed(self, path: Path | str) -> bool:
        """Whether *path* is a directory that contributes no namespace segment."""
        return _spec(self.collapsed).match_file(self._relative(path))

    def is_ignored(self, path: Path | str) -> bool:
        """Whether *path* is excluded from autoloading."""
        return _spec(self.ignored).match_file(self._relative(path))


class Reloader:
    """Code-reload signals of the reference host."""

    def __init__(self) -> None:
        self._before_unload: list[Callback] = []
        self._to_prepare: list[Callback] = []

    def before_class_unload(self, callback: Callback) -> Callback:
        self._before_unload.append(callback)
        return callback

    def to_prepare(self, callback: Callback) -> Callback:
        self._to_prepare.append(callback)
        return callback

    def unload(self) -> None:
        for callback in self._before_unload:
            callback(self)

    def prepare(self) -> None:
        for callback in self._to_prepare:
            callback(self)

    def reload(self) -> None:
        """Fire a full unload-then-prepare cycle."""
        self.unload()
        self.prepare()


# ------------------------------------------------------------------ #
# Application
# ------------------------------------------------------------------ #


class Application:
    """Minimal in-process host implementing :class:`Host`.

    Args:
        root: Application root directory.
        env: Environment name; reload hooks are only installed for
            ``"development"``.
        logger: Logger receiving verbose progress lines. ``None`` sends
            them to the console instead.
    """

    def __init__(
        self,
        root: Path | str,
        env: str = "production",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.root = Path(root).resolve()
        self.env = env
        self.logger = logger
        self.config = HostConfig()
        self.autoloader = Autoloader(self.root)
        self.reloader = Reloader()
        self._initializers: list[tuple[str, str, Callback]] = []
        self.booted = False

    @property
    def development(self) -> bool:
        return self.env == DEVELOPMENT

    def initializer(self, name: str, callback: Callback, group: str = "default") -> None:
        self._initializers.append((name, group, callback))

    def initializer_names(self) -> list[str]:
        return [name for name, _, _ in self._initializers]

    def run_initializers(self) -> None:
        for _, _, callback in self._initializers:
            callback(self)

    def run_after_initialize(self) -> None:
        self.config.run_after_initialize(self)

    def boot(self) -> None:
        """Run every initializer, then every ``after_initialize`` callback."""
        self.run_initializers()
        self.run_after_initialize()
        self.booted = True
