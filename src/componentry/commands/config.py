"""Config commands -- view and create the project settings file.

Provides the ``componentry config`` sub-command group for reading the
effective settings (project file plus environment overrides) and writing
a ``componentry.json`` file populated with the defaults.
"""

from __future__ import annotations

from pathlib import Path

import typer

from componentry.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


def _root(ctx: typer.Context) -> Path:
    obj = ctx.obj or {}
    return Path(obj.get("root") or Path.cwd())


def _check_writable(path: Path, force: bool) -> None:
    from componentry.exceptions import InvalidUsageError

    if path.exists() and not force:
        raise InvalidUsageError(f"{path} already exists (use --force to overwrite)")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective settings.

    Example::

        componentry config show
        componentry --json config show
    """
    from componentry.config import resolve_settings, settings_path
    from componentry.exceptions import ConfigError

    root = _root(ctx)
    try:
        settings = resolve_settings(root)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Settings file: {settings_path(root)}")
    format_response(settings.model_dump(mode="json"))


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing settings file."
    ),
    base_dir: str = typer.Option(
        "components", "--base-dir", help="Components root, relative to the app root."
    ),
) -> None:
    """Write a ``componentry.json`` settings file with default values.

    Raises:
        typer.Exit: With code 2 if the file exists and ``--force`` is not given.

    Example::

        componentry config init
        componentry config init --base-dir app/components --force
    """
    from componentry.config import save_project_settings, settings_path
    from componentry.exceptions import ComponentryError
    from componentry.models import ComponentrySettings

    root = _root(ctx)
    path = settings_path(root)
    try:
        _check_writable(path, force)
    except ComponentryError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    written = save_project_settings(root, ComponentrySettings(base_dir=base_dir))
    success(f"Wrote {written}")
