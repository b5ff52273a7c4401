"""Canonical Pydantic models shared across all componentry modules.

The models fall into two groups:

**Settings models** -- serialised as JSON in the application's
``componentry.json`` file: :class:`ComponentrySettings`.

**Discovery models** -- produced by the directory scanner and consumed by
the lifecycle dispatcher, the path registrar and the CLI:
:class:`ComponentDescriptor`.

All models use Pydantic v2. Descriptors are frozen so that the cached scan
result cannot be mutated after discovery.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

NAMESPACE_SEPARATOR = "::"
"""Separator between the segments of a hierarchical component name."""


# --- Settings ---


class ComponentrySettings(BaseModel):
    """Directory conventions and behaviour flags for component discovery.

    Loaded from ``<app_root>/componentry.json`` by
    :func:`~componentry.config.load_project_settings`. Fields here have the
    lowest precedence and can be overridden by environment variables or
    explicit arguments. See :func:`~componentry.config.resolve_settings`
    for the full precedence chain.

    Example::

        ComponentrySettings(base_dir="app/components", verbose=True)
    """

    base_dir: str = Field(
        default="components",
        description="Components root directory, relative to the application root",
    )
    nested_marker: str = Field(
        default="_components",
        description="Reserved directory name whose children are sub-components",
    )
    initializer_file: str = Field(
        default="initialize.py",
        description="Optional per-component file declaring lifecycle hooks",
    )
    initializer_handle: str = Field(
        default="Initialize",
        description="Attribute the initializer file must define",
    )
    legacy_dir: str = Field(
        default="_legacy", description="Legacy flat-namespace directory name"
    )
    migrations_dir: str = Field(
        default="migrations", description="Per-component migrations directory name"
    )
    helpers_dir: str = Field(
        default="helpers", description="Helper directory name (matched at any depth)"
    )
    routes_file: str = Field(
        default="routes.py", description="Route file name (matched at any depth)"
    )
    verbose: bool = Field(
        default=False, description="Emit [CF init] progress lines"
    )
    reload_exclude: list[str] = Field(
        default_factory=lambda: ["Tracing"],
        description="Components skipped when hooks are re-run after a code reload",
    )


# --- Discovery ---


class ComponentDescriptor(BaseModel):
    """A discovered component directory and its hierarchical name.

    Produced by :func:`~componentry.scanner.scan_components`. The *name* is
    derived from *path* by a fixed transform, so two descriptors with the
    same path always carry the same name.

    Attributes:
        name: Hierarchical name such as ``"Clients"`` or
            ``"Clients::Billing"``.
        path: Absolute path of the component directory.
        relative_path: POSIX path of the directory relative to the components
            root, e.g. ``"clients/_components/billing"``.
        sub_component: ``True`` when the directory sits below a nested-marker
            (``_components``) directory.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    relative_path: str
    sub_component: bool = False

    @property
    def segments(self) -> list[str]:
        """The name split into its namespace segments."""
        return self.name.split(NAMESPACE_SEPARATOR)

    @property
    def parent_name(self) -> Optional[str]:
        """Name of the enclosing component, or ``None`` for a top-level one."""
        segments = self.segments
        if len(segments) == 1:
            return None
        return NAMESPACE_SEPARATOR.join(segments[:-1])
