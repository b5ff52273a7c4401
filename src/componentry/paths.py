"""Auxiliary path registration for discovered components.

Computes the per-component directories and files the host needs to know
about and appends them to the host's path collections:

* ``<component>/migrations`` -> ``paths["db/migrate"]``
* ``**/routes.py`` -> ``paths["config/routes.py"]`` (prepended)
* ``**/helpers`` -> ``paths["app/helpers"]`` (prepended) and autoload paths
* ``<component>/_legacy`` -> autoload and eager-load paths
* ``<component>/_components`` -> eager-loaded path entries
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from componentry.context import FrameworkContext

MIGRATIONS_KEY = "db/migrate"
ROUTES_KEY = "config/routes.py"
HELPERS_KEY = "app/helpers"


class PathRegistrar:
    """Registers component paths with a host application."""

    def __init__(self, context: FrameworkContext) -> None:
        self.context = context

    def _existing_dirs(self, name: str) -> list[Path]:
        return [
            d.path / name
            for d in self.context.components()
            if (d.path / name).is_dir()
        ]

    def migration_paths(self) -> list[Path]:
        return self._existing_dirs(self.context.settings.migrations_dir)

    def legacy_paths(self) -> list[Path]:
        return self._existing_dirs(self.context.settings.legacy_dir)

    def routing_paths(self) -> list[Path]:
        base = self.context.base_dir
        if not base.is_dir():
            return []
        return sorted(
            p for p in base.glob(f"**/{self.context.settings.routes_file}") if p.is_file()
        )

    def helper_paths(self) -> list[Path]:
        base = self.context.base_dir
        if not base.is_dir():
            return []
        return sorted(
            p for p in base.glob(f"**/{self.context.settings.helpers_dir}") if p.is_dir()
        )

    def subcomponent_roots(self) -> list[Path]:
        """Distinct nested-marker directories that hold sub-components."""
        roots: list[Path] = []
        for descriptor in self.context.components():
            if descriptor.sub_component and descriptor.path.parent not in roots:
                roots.append(descriptor.path.parent)
        return roots

    def register(self, app: Any) -> None:
        """Append every computed path to *app*'s path collections."""
        config = app.config

        for root in self.subcomponent_roots():
            config.paths.add(str(root), eager_load=True)

        self.context.log("Register DB Migrations")
        for path in self.migration_paths():
            config.paths[MIGRATIONS_KEY].push(str(path))

        self.context.log("Register Components Routes")
        config.paths[ROUTES_KEY].unshift(*[str(p) for p in self.routing_paths()])

        self.context.log("Register Components Helpers")
        helpers = [str(p) for p in self.helper_paths()]
        config.paths[HELPERS_KEY].unshift(*helpers)
        config.autoload_paths.extend(helpers)

        self.context.log("Register legacy directories under modules")
        for path in self.legacy_paths():
            config.autoload_paths.append(str(path))
            config.eager_load_paths.append(str(path))
