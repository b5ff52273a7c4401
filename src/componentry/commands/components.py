"""Components commands -- inspect discovery results.

Provides the ``componentry components`` sub-command group. Discovery runs
against the application root given by ``--root`` using the resolved
project settings; no component code is executed except by ``show``, which
loads the requested component's initializer to report its hooks.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer

from componentry.output import error, format_response, info, print_table

if TYPE_CHECKING:
    from componentry.context import FrameworkContext


components_app = typer.Typer(no_args_is_help=True)


def context_from(ctx: typer.Context) -> FrameworkContext:
    """Build a :class:`~componentry.context.FrameworkContext` from CLI state."""
    from componentry.config import resolve_settings
    from componentry.context import FrameworkContext

    obj = ctx.obj or {}
    root = Path(obj.get("root") or Path.cwd())
    verbose = True if obj.get("verbose") else None
    return FrameworkContext(root, resolve_settings(root, verbose=verbose))


def _relative(path: Path, base: Path) -> str:
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return str(path)


@components_app.command("list")
def components_list(ctx: typer.Context) -> None:
    """List discovered components in dispatch order.

    Example::

        componentry components list
        componentry --json components list
    """
    from componentry.exceptions import ComponentryError
    from componentry.initializers import initializer_path

    context = context_from(ctx)
    try:
        components = context.components()
    except ComponentryError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not components:
        info(f"No components found under {context.base_dir}")
        return

    rows = [
        [
            d.name,
            _relative(d.path, context.base_dir),
            "sub-component" if d.sub_component else "component",
            "yes" if initializer_path(d, context.settings).is_file() else "no",
        ]
        for d in components
    ]
    print_table(["name", "path", "kind", "initializer"], rows, title="Components")


@components_app.command("show")
def components_show(
    ctx: typer.Context,
    name: str = typer.Argument(help="Component name, e.g. 'Clients::Billing'."),
) -> None:
    """Show one component and the hooks its initializer provides.

    Exits with code 4 when no component has the given name.

    Example::

        componentry components show Clients::Billing
    """
    from componentry.exceptions import ComponentryError
    from componentry.initializers import load_initializer
    from componentry.lifecycle import LifecycleDispatcher

    context = context_from(ctx)
    dispatcher = LifecycleDispatcher(context)
    try:
        dispatcher.namespace_by_name(name)
        descriptor = context.find(name)
        handle = load_initializer(descriptor, context.settings)
    except ComponentryError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    hooks = []
    if handle is not None:
        hooks = [hook for hook in ("init", "ready") if getattr(handle, f"has_{hook}")]
    format_response(
        {
            "name": descriptor.name,
            "path": str(descriptor.path),
            "sub_component": descriptor.sub_component,
            "parent": descriptor.parent_name,
            "initializer": handle is not None,
            "hooks": hooks,
        }
    )
