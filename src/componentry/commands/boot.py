"""Boot command -- run both lifecycle phases against the reference host.

Useful to check that every component's ``initialize.py`` imports and its
hooks run cleanly, without starting the real application. Hook errors are
reported and mapped to a non-zero exit code.
"""

from __future__ import annotations

import typer

from componentry.output import error, print_table, success


def boot_command(
    ctx: typer.Context,
    env: str = typer.Option(
        "production", "--env", "-e", help="Environment name passed to the host."
    ),
    reload: bool = typer.Option(
        False, "--reload", help="Simulate one code-reload cycle (implies --env development)."
    ),
) -> None:
    """Boot the reference host and report each component's lifecycle state.

    Example::

        componentry boot
        componentry --verbose boot --reload
    """
    from componentry.commands.components import context_from
    from componentry.exceptions import ComponentryError
    from componentry.exit_codes import EXIT_GENERIC_FAILURE
    from componentry.framework import initialize
    from componentry.host import DEVELOPMENT, Application
    from componentry.initializers import unload_initializers

    context = context_from(ctx)
    if reload:
        env = DEVELOPMENT

    application = Application(context.app_root, env=env)
    try:
        framework = initialize(application, settings=context.settings)
        application.boot()
        if reload:
            application.reloader.reload()
    except ComponentryError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except Exception as exc:
        error(f"Component boot failed: {exc}")
        raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None
    finally:
        unload_initializers()

    states = framework.dispatcher.states()
    rows = [[name, state.value] for name, state in states.items()]
    print_table(["name", "state"], rows, title="Lifecycle")
    success(f"Booted {len(states)} components ({env})")
