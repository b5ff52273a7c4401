"""Typer application factory and CLI entry point for componentry.

The ``componentry`` command inspects an application's component tree
without starting the application itself:

* ``components list`` / ``components show`` -- discovery results;
* ``boot`` -- run both lifecycle phases against the reference host;
* ``config show`` / ``config init`` -- the project settings file.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. :class:`~componentry.exceptions.ComponentryError`
instances exit with their mapped code; anything else exits with
:data:`~componentry.exit_codes.EXIT_GENERIC_FAILURE`.
"""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from typing import Any

import typer

from componentry import __version__
from componentry.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="componentry",
    help="Discover application components and run their lifecycle hooks.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"componentry {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    root: Path = typer.Option(
        Path("."), "--root", "-r", help="Application root directory."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show [CF init] progress lines."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~componentry.output.OutputManager` and
    stores the application root and verbosity in ``ctx.obj``.
    """
    from componentry.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet)
    )

    ctx.ensure_object(dict)
    ctx.obj["root"] = root.resolve()
    ctx.obj["verbose"] = verbose


def register_commands(target: typer.Typer) -> None:
    """Attach the built-in sub-commands to *target*."""
    from componentry.commands.boot import boot_command
    from componentry.commands.components import components_app
    from componentry.commands.config import config_app

    target.add_typer(components_app, name="components", help="Inspect discovered components.")
    target.add_typer(config_app, name="config", help="Project settings management.")
    target.command("boot")(boot_command)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``componentry`` console script.

    Unhandled :class:`~componentry.exceptions.ComponentryError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    exit with :data:`~componentry.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        register_commands(app)
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from componentry.exceptions import ComponentryError
        from componentry.output import error

        if isinstance(exc, ComponentryError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
