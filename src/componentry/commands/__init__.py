"""Built-in CLI sub-commands for componentry.

* :mod:`~componentry.commands.components` -- list and show discovered
  components.
* :mod:`~componentry.commands.boot` -- run both lifecycle phases against
  the reference host.
* :mod:`~componentry.commands.config` -- view and create the project
  settings file.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups) or a plain callback function registered directly on
the root app (for single commands like ``boot``).
"""
